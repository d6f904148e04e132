"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional

from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from agriforum.domain.model import Comment
from agriforum.domain.repository import CommentRepository
from agriforum.domain.value import CommentId, PostId
from agriforum.persistence.mappers import comment_to_dict, row_to_comment
from agriforum.persistence.tables import forum_comments_table


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(forum_comments_table).where(
            forum_comments_table.c.id == comment_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_post(
        self,
        post_id: PostId,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Comment]:
        """Find comments on a post, oldest first."""
        stmt = (
            select(forum_comments_table)
            .where(forum_comments_table.c.post_id == post_id)
            .order_by(forum_comments_table.c.created_at, forum_comments_table.c.id)
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def create(self, comment: Comment) -> Comment:
        """Insert a comment row."""
        stmt = insert(forum_comments_table).values(**comment_to_dict(comment))
        await self.session.execute(stmt)
        await self.session.flush()
        return comment

    async def count_by_post(self, post_id: PostId) -> int:
        """Count comments on a post."""
        stmt = (
            select(func.count())
            .select_from(forum_comments_table)
            .where(forum_comments_table.c.post_id == post_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
