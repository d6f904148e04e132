"""SQLAlchemy table definitions for AgriForum.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# FORUM_POSTS TABLE
# ============================================================================
forum_posts_table = Table(
    "forum_posts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("title", String(300), nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "category",
        Enum(
            "crop",
            "soil",
            "weather",
            "pests",
            "equipment",
            "market",
            "general",
            name="forum_category",
            create_type=False,
        ),
        nullable=False,
        server_default="general",
    ),
    # Owned by the external identity provider, so no foreign key
    Column("user_id", UUID, nullable=False),
    # Cached aggregates over forum_votes and forum_comments
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("upvotes >= 0", name="forum_posts_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="forum_posts_downvotes_non_negative"),
    CheckConstraint(
        "comment_count >= 0", name="forum_posts_comment_count_non_negative"
    ),
)

Index("idx_forum_posts_created_at", forum_posts_table.c.created_at.desc())
Index("idx_forum_posts_category", forum_posts_table.c.category)
Index("idx_forum_posts_user_id", forum_posts_table.c.user_id)

# ============================================================================
# FORUM_VOTES TABLE (vote ledger)
# ============================================================================
forum_votes_table = Table(
    "forum_votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column("user_id", UUID, nullable=False),
    Column(
        "post_id",
        UUID,
        ForeignKey("forum_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "vote_type",
        Enum("up", "down", name="forum_vote_type", create_type=False),
        nullable=False,
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "post_id", name="uq_forum_votes_user_post"),
)

Index("idx_forum_votes_post_id", forum_votes_table.c.post_id)

# ============================================================================
# FORUM_COMMENTS TABLE
# ============================================================================
forum_comments_table = Table(
    "forum_comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="gen_random_uuid()"),
    Column(
        "post_id",
        UUID,
        ForeignKey("forum_posts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("user_id", UUID, nullable=False),
    Column("content", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint(
        "length(btrim(content)) > 0", name="forum_comments_content_not_blank"
    ),
)

Index(
    "idx_forum_comments_post_id_created_at",
    forum_comments_table.c.post_id,
    forum_comments_table.c.created_at,
)
