"""Post representation shared by the post use cases."""

from datetime import datetime

from pydantic import BaseModel

from agriforum.domain.model import Post
from agriforum.domain.value import PostCategory, VoteState


class PostItem(BaseModel):
    """Post as returned to the forum client."""

    post_id: str
    title: str
    content: str
    category: PostCategory
    author_id: str
    upvotes: int
    downvotes: int
    score: int
    comment_count: int
    created_at: datetime
    updated_at: datetime
    vote_state: VoteState  # Caller's vote (NONE if anonymous)

    @classmethod
    def from_post(
        cls, post: Post, vote_state: VoteState = VoteState.NONE
    ) -> "PostItem":
        return cls(
            post_id=str(post.id),
            title=post.title,
            content=post.content,
            category=post.category,
            author_id=str(post.author_id),
            upvotes=post.upvotes,
            downvotes=post.downvotes,
            score=post.score,
            comment_count=post.comment_count,
            created_at=post.created_at,
            updated_at=post.updated_at,
            vote_state=vote_state,
        )
