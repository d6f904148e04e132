"""Test configuration and fixtures."""

from datetime import datetime
from uuid import uuid4

from agriforum.domain.model import Comment, Post, Vote
from agriforum.domain.value import (
    CommentId,
    PostCategory,
    PostId,
    UserId,
    VoteId,
    VoteType,
)


def make_post(
    title: str = "Yellow leaves on maize",
    content: str = "Lower leaves turn yellow from the tip. Nitrogen?",
    category: PostCategory = PostCategory.CROP,
    author_id: UserId | None = None,
    upvotes: int = 0,
    downvotes: int = 0,
    comment_count: int = 0,
    created_at: datetime | None = None,
) -> Post:
    """Helper function to build a post for tests.

    Args:
        title: Post title
        content: Post body
        category: Forum category
        author_id: Author (random if omitted)
        upvotes: Initial upvotes
        downvotes: Initial downvotes
        comment_count: Initial comment count
        created_at: Creation time (now if omitted)

    Returns:
        Post domain model
    """
    now = created_at or datetime.now()
    return Post(
        id=PostId(uuid4()),
        title=title,
        content=content,
        category=category,
        author_id=author_id or UserId(uuid4()),
        upvotes=upvotes,
        downvotes=downvotes,
        comment_count=comment_count,
        created_at=now,
        updated_at=now,
    )


def make_vote(post_id: PostId, user_id: UserId, vote_type: VoteType) -> Vote:
    """Helper function to build a ledger entry for seeding."""
    return Vote(
        id=VoteId(uuid4()), user_id=user_id, post_id=post_id, vote_type=vote_type
    )


def make_comment(
    post_id: PostId,
    author_id: UserId | None = None,
    content: str = "Same problem here after the heavy rains.",
) -> Comment:
    """Helper function to build a comment for seeding."""
    return Comment(
        id=CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        content=content,
    )
