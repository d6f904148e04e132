"""PostgreSQL implementation of Post repository."""

from typing import List, Optional

import logfire
from sqlalchemy import desc, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agriforum.domain.model import Post
from agriforum.domain.repository.post import PostRepository, PostSortOrder
from agriforum.domain.value import EngagementCounts, PostCategory, PostId
from agriforum.persistence.mappers import post_to_dict, row_to_post
from agriforum.persistence.tables import forum_posts_table


class PostgresPostRepository(PostRepository):
    """PostgreSQL implementation of PostRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    @staticmethod
    def _apply_filters(stmt, category: Optional[PostCategory], search: Optional[str]):
        if category:
            stmt = stmt.where(forum_posts_table.c.category == category.value)
        if search:
            stmt = stmt.where(
                or_(
                    forum_posts_table.c.title.icontains(search, autoescape=True),
                    forum_posts_table.c.content.icontains(search, autoescape=True),
                )
            )
        return stmt

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        with logfire.span("post_repository.find_by_id", post_id=str(post_id)):
            stmt = select(forum_posts_table).where(forum_posts_table.c.id == post_id)
            result = await self.session.execute(stmt)
            row = result.fetchone()

            if not row:
                logfire.warn("Post not found", post_id=str(post_id))
                return None

            return row_to_post(row._asdict())

    async def find_by_id_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID, holding a row lock until the transaction ends."""
        with logfire.span(
            "post_repository.find_by_id_for_update", post_id=str(post_id)
        ):
            stmt = (
                select(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .with_for_update()
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.NEWEST,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> List[Post]:
        """Find posts with filtering and pagination."""
        with logfire.span(
            "post_repository.find_all",
            sort=sort.value,
            category=category.value if category else None,
            search=search,
            limit=limit,
            offset=offset,
        ):
            stmt = self._apply_filters(select(forum_posts_table), category, search)

            if sort == PostSortOrder.MOST_VOTED:
                score = forum_posts_table.c.upvotes - forum_posts_table.c.downvotes
                stmt = stmt.order_by(desc(score), desc(forum_posts_table.c.created_at))
            else:
                stmt = stmt.order_by(desc(forum_posts_table.c.created_at))

            stmt = stmt.limit(limit).offset(offset)

            result = await self.session.execute(stmt)
            posts = [row_to_post(row._asdict()) for row in result.fetchall()]

            logfire.info("Found posts", count=len(posts))
            return posts

    async def count(
        self,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        with logfire.span(
            "post_repository.count",
            category=category.value if category else None,
            search=search,
        ):
            stmt = self._apply_filters(
                select(func.count()).select_from(forum_posts_table), category, search
            )
            result = await self.session.execute(stmt)
            count = result.scalar() or 0
            logfire.info("Post count", count=count)
            return count

    async def list_ids(self) -> List[PostId]:
        """List the IDs of every post, oldest first."""
        stmt = select(forum_posts_table.c.id).order_by(forum_posts_table.c.created_at)
        result = await self.session.execute(stmt)
        return [PostId(row.id) for row in result.fetchall()]

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        with logfire.span(
            "post_repository.save", post_id=str(post.id), title=post.title
        ):
            stmt = insert(forum_posts_table).values(**post_to_dict(post))
            await self.session.execute(stmt)
            await self.session.flush()
            logfire.info("Post saved successfully", post_id=str(post.id))
            return post

    async def apply_vote_delta(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Post]:
        """Atomically add deltas to the vote counters."""
        with logfire.span(
            "post_repository.apply_vote_delta",
            post_id=str(post_id),
            upvotes_delta=upvotes_delta,
            downvotes_delta=downvotes_delta,
        ):
            stmt = (
                update(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .values(
                    upvotes=forum_posts_table.c.upvotes + upvotes_delta,
                    downvotes=forum_posts_table.c.downvotes + downvotes_delta,
                )
                .returning(forum_posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def increment_comment_count(self, post_id: PostId) -> Optional[Post]:
        """Atomically increment comment_count by 1."""
        with logfire.span(
            "post_repository.increment_comment_count", post_id=str(post_id)
        ):
            stmt = (
                update(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .values(comment_count=forum_posts_table.c.comment_count + 1)
                .returning(forum_posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None

    async def overwrite_counts(
        self, post_id: PostId, counts: EngagementCounts
    ) -> Optional[Post]:
        """Overwrite all cached counters with recomputed values."""
        with logfire.span(
            "post_repository.overwrite_counts",
            post_id=str(post_id),
            upvotes=counts.upvotes,
            downvotes=counts.downvotes,
            comment_count=counts.comment_count,
        ):
            stmt = (
                update(forum_posts_table)
                .where(forum_posts_table.c.id == post_id)
                .values(
                    upvotes=counts.upvotes,
                    downvotes=counts.downvotes,
                    comment_count=counts.comment_count,
                )
                .returning(forum_posts_table)
            )
            result = await self.session.execute(stmt)
            row = result.fetchone()
            return row_to_post(row._asdict()) if row else None
