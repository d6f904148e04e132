"""Domain value objects for AgriForum.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from typing import Optional

from agriforum.domain.value.common import ValueObject


class VoteType(str, Enum):
    """Type of vote a user can request on a post."""

    UP = "up"
    DOWN = "down"


class VoteState(str, Enum):
    """A user's current vote on a post.

    NONE is never stored: the ledger represents it by the absence of a row.
    """

    NONE = "none"
    UP = "up"
    DOWN = "down"

    @classmethod
    def from_vote_type(cls, vote_type: Optional[VoteType]) -> "VoteState":
        """Map a stored vote type (or no row) to a ledger state."""
        if vote_type is None:
            return cls.NONE
        return cls(vote_type.value)

    def as_vote_type(self) -> Optional[VoteType]:
        """Map a ledger state to the vote type to store (None means no row)."""
        if self is VoteState.NONE:
            return None
        return VoteType(self.value)


class PostCategory(str, Enum):
    """Forum categories farmers can file a question under."""

    CROP = "crop"
    SOIL = "soil"
    WEATHER = "weather"
    PESTS = "pests"
    EQUIPMENT = "equipment"
    MARKET = "market"
    GENERAL = "general"


class VoteTransition(ValueObject):
    """Result of applying a requested vote to a user's current ledger state.

    Holds the next ledger state together with the exact counter deltas that
    must be applied to the post in the same unit of work.
    """

    previous: VoteState
    requested: VoteType
    next: VoteState
    upvotes_delta: int
    downvotes_delta: int


class EngagementCounts(ValueObject):
    """Aggregate counters cached on a post."""

    upvotes: int = 0
    downvotes: int = 0
    comment_count: int = 0

    @property
    def score(self) -> int:
        """Net vote score shown in listings."""
        return self.upvotes - self.downvotes
