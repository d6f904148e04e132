"""PostgreSQL implementation of Vote repository."""

from typing import Dict, Optional, Sequence

from sqlalchemy import and_, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from agriforum.domain.model import Vote
from agriforum.domain.repository import VoteRepository
from agriforum.domain.value import PostId, UserId, VoteType
from agriforum.persistence.mappers import row_to_vote, vote_to_dict
from agriforum.persistence.tables import forum_votes_table


class PostgresVoteRepository(VoteRepository):
    """PostgreSQL implementation of VoteRepository.

    The guarded UPDATE and DELETE statements only match a row that still
    holds the expected vote type; a zero rowcount means another request
    changed the ledger after we read it.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    def _entry(self, user_id: UserId, post_id: PostId):
        return and_(
            forum_votes_table.c.user_id == user_id,
            forum_votes_table.c.post_id == post_id,
        )

    async def find_by_user_and_post(
        self, user_id: UserId, post_id: PostId
    ) -> Optional[Vote]:
        """Find a user's ledger entry on a post."""
        stmt = select(forum_votes_table).where(self._entry(user_id, post_id))
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_vote(row._asdict()) if row else None

    async def find_by_user_and_posts(
        self, user_id: UserId, post_ids: Sequence[PostId]
    ) -> Dict[PostId, VoteType]:
        """Find a user's votes on multiple posts (batch query)."""
        if not post_ids:
            return {}

        stmt = select(forum_votes_table.c.post_id, forum_votes_table.c.vote_type).where(
            and_(
                forum_votes_table.c.user_id == user_id,
                forum_votes_table.c.post_id.in_(post_ids),
            )
        )
        result = await self.session.execute(stmt)
        return {
            PostId(row.post_id): VoteType(row.vote_type) for row in result.fetchall()
        }

    async def create(self, vote: Vote) -> Vote:
        """Insert a ledger entry (unique on user and post)."""
        stmt = insert(forum_votes_table).values(**vote_to_dict(vote))
        await self.session.execute(stmt)
        await self.session.flush()
        return vote

    async def update_vote_type(
        self,
        user_id: UserId,
        post_id: PostId,
        expected: VoteType,
        new: VoteType,
    ) -> bool:
        """Switch an entry's vote type if it still holds the expected type."""
        stmt = (
            update(forum_votes_table)
            .where(self._entry(user_id, post_id))
            .where(forum_votes_table.c.vote_type == expected.value)
            .values(vote_type=new.value, updated_at=func.now())
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def delete_by_user_and_post(
        self, user_id: UserId, post_id: PostId, expected: VoteType
    ) -> bool:
        """Delete an entry if it still holds the expected type."""
        stmt = (
            delete(forum_votes_table)
            .where(self._entry(user_id, post_id))
            .where(forum_votes_table.c.vote_type == expected.value)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def count_by_post(self, post_id: PostId, vote_type: VoteType) -> int:
        """Count ledger entries of one type on a post."""
        stmt = (
            select(func.count())
            .select_from(forum_votes_table)
            .where(forum_votes_table.c.post_id == post_id)
            .where(forum_votes_table.c.vote_type == vote_type.value)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
