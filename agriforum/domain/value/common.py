"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable, compared by value. Hashable so it can key a dict."""

    model_config = ConfigDict(frozen=True)
