"""In-memory post repository for testing."""

from typing import Optional

from agriforum.domain.model.post import Post
from agriforum.domain.repository.post import PostRepository, PostSortOrder
from agriforum.domain.value import EngagementCounts, PostCategory, PostId

from .store import InMemoryStore, integrity_error


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: Optional[InMemoryStore] = None) -> None:
        self.store = store or InMemoryStore()

    def _filtered(
        self, category: Optional[PostCategory], search: Optional[str]
    ) -> list[Post]:
        posts = list(self.store.posts.values())
        if category is not None:
            posts = [p for p in posts if p.category == category]
        if search:
            needle = search.lower()
            posts = [
                p
                for p in posts
                if needle in p.title.lower() or needle in p.content.lower()
            ]
        return posts

    def _update_counts(self, post_id: PostId, **counts: int) -> Optional[Post]:
        post = self.store.posts.get(post_id)
        if post is None:
            return None
        if any(value < 0 for value in counts.values()):
            # Mirrors the non-negative CHECK constraints on forum_posts
            raise integrity_error("UPDATE forum_posts", "negative counter", "23514")
        updated = post.model_copy(update=counts)
        self.store.posts[post_id] = updated
        return updated

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self.store.posts.get(post_id)

    async def find_by_id_for_update(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID; the store lock already serializes writers."""
        return self.store.posts.get(post_id)

    async def find_all(
        self,
        sort: PostSortOrder = PostSortOrder.NEWEST,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
        limit: int = 30,
        offset: int = 0,
    ) -> list[Post]:
        """Find posts with filtering and pagination."""
        posts = self._filtered(category, search)

        if sort == PostSortOrder.MOST_VOTED:
            posts.sort(key=lambda p: (p.score, p.created_at), reverse=True)
        else:
            posts.sort(key=lambda p: p.created_at, reverse=True)

        return posts[offset : offset + limit]

    async def count(
        self,
        category: Optional[PostCategory] = None,
        search: Optional[str] = None,
    ) -> int:
        """Count posts matching the given filters."""
        return len(self._filtered(category, search))

    async def list_ids(self) -> list[PostId]:
        """List the IDs of every post, oldest first."""
        posts = sorted(self.store.posts.values(), key=lambda p: p.created_at)
        return [p.id for p in posts]

    async def save(self, post: Post) -> Post:
        """Insert a new post."""
        if post.id in self.store.posts:
            raise integrity_error("INSERT forum_posts", "duplicate id", "23505")
        self.store.posts[post.id] = post
        return post

    async def apply_vote_delta(
        self, post_id: PostId, upvotes_delta: int, downvotes_delta: int
    ) -> Optional[Post]:
        """Add deltas to the vote counters."""
        post = self.store.posts.get(post_id)
        if post is None:
            return None
        return self._update_counts(
            post_id,
            upvotes=post.upvotes + upvotes_delta,
            downvotes=post.downvotes + downvotes_delta,
        )

    async def increment_comment_count(self, post_id: PostId) -> Optional[Post]:
        """Increment comment_count by 1."""
        post = self.store.posts.get(post_id)
        if post is None:
            return None
        return self._update_counts(post_id, comment_count=post.comment_count + 1)

    async def overwrite_counts(
        self, post_id: PostId, counts: EngagementCounts
    ) -> Optional[Post]:
        """Overwrite all cached counters."""
        return self._update_counts(
            post_id,
            upvotes=counts.upvotes,
            downvotes=counts.downvotes,
            comment_count=counts.comment_count,
        )
