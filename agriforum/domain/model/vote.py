"""Vote ledger entry.

The vote ledger is the single source of truth for a user's current vote on
a post. A user holds at most one entry per post; having no entry means the
user has not voted (VoteState.NONE).
"""

from datetime import datetime

from pydantic import Field

from agriforum.domain.model.common import DomainModel
from agriforum.domain.value import PostId, UserId, VoteId, VoteState, VoteType


class Vote(DomainModel):
    """Vote ledger entry.

    Business rules:
    - One entry per user per post (enforced by database unique constraint)
    - Created on first vote, updated in place on switch, deleted on toggle-off
    - Only ever written on behalf of the casting user
    """

    id: VoteId
    user_id: UserId
    post_id: PostId
    vote_type: VoteType
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def state(self) -> VoteState:
        """Ledger state represented by this entry."""
        return VoteState.from_vote_type(self.vote_type)
