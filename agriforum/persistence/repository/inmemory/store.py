"""Shared backing store for the in-memory repositories."""

import asyncio
from dataclasses import dataclass, field

from sqlalchemy.exc import IntegrityError

from agriforum.domain.model import Comment, Post, Vote
from agriforum.domain.value import PostId, UserId


@dataclass
class InMemoryStore:
    """Tables shared by the in-memory repositories of one test environment.

    Models are frozen, so a shallow copy of the containers is a complete
    snapshot.
    """

    posts: dict[PostId, Post] = field(default_factory=dict)
    votes: dict[tuple[UserId, PostId], Vote] = field(default_factory=dict)
    comments: list[Comment] = field(default_factory=list)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    def snapshot(self) -> tuple[dict, dict, list]:
        return dict(self.posts), dict(self.votes), list(self.comments)

    def restore(self, snapshot: tuple[dict, dict, list]) -> None:
        posts, votes, comments = snapshot
        self.posts = posts
        self.votes = votes
        self.comments = comments


class ConstraintViolation(Exception):
    """Driver error raised by the in-memory tables.

    Carries the PostgreSQL SQLSTATE of the constraint it mirrors, the way
    asyncpg errors do, so storage error translation treats both alike.
    """

    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def integrity_error(statement: str, message: str, sqlstate: str) -> IntegrityError:
    """Build the IntegrityError SQLAlchemy would raise for a violation."""
    return IntegrityError(statement, None, ConstraintViolation(message, sqlstate))
