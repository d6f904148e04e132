"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable entity base.

    Changes go through ``model_copy(update=...)`` in the repositories, so a
    model handed out by a repository is never altered behind the caller.
    """

    model_config = ConfigDict(frozen=True, validate_assignment=True)
