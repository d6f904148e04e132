"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from agriforum.domain.model import Comment, Post, Vote
from agriforum.domain.value import (
    CommentId,
    PostCategory,
    PostId,
    UserId,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def row_to_post(row: Dict[str, Any]) -> Post:
    """Convert database row to Post domain model.

    Args:
        row: Database row as dict

    Returns:
        Post domain model
    """
    return Post(
        id=PostId(_uuid(row["id"])),
        title=row["title"],
        content=row["content"],
        category=PostCategory(row["category"]),
        author_id=UserId(_uuid(row["user_id"])),
        upvotes=row["upvotes"],
        downvotes=row["downvotes"],
        comment_count=row["comment_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def post_to_dict(post: Post) -> Dict[str, Any]:
    """Convert Post domain model to database dict.

    Args:
        post: Post domain model

    Returns:
        Dict suitable for database insertion
    """
    return {
        "id": post.id,
        "title": post.title,
        "content": post.content,
        "category": post.category.value,
        "user_id": post.author_id,
        "upvotes": post.upvotes,
        "downvotes": post.downvotes,
        "comment_count": post.comment_count,
        "created_at": post.created_at,
        "updated_at": post.updated_at,
    }


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model."""
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        post_id=PostId(_uuid(row["post_id"])),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict."""
    return {
        "id": vote.id,
        "user_id": vote.user_id,
        "post_id": vote.post_id,
        "vote_type": vote.vote_type.value,
        "created_at": vote.created_at,
        "updated_at": vote.updated_at,
    }


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model."""
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["user_id"])),
        content=row["content"],
        created_at=row["created_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return {
        "id": comment.id,
        "post_id": comment.post_id,
        "user_id": comment.author_id,
        "content": comment.content,
        "created_at": comment.created_at,
    }
