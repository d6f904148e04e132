"""initial_forum_schema

Create the community forum schema:
- forum_posts (questions with cached upvotes, downvotes and comment_count)
- forum_votes (vote ledger, one row per user and post)
- forum_comments (append-only replies)

Revision ID: 3f6c1d2a9b47
Revises:
Create Date: 2026-10-19 09:12:41.318204

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3f6c1d2a9b47"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Create ENUM types (idempotent)
    op.execute("""
        DO $$ BEGIN
            CREATE TYPE forum_category AS ENUM (
                'crop', 'soil', 'weather', 'pests', 'equipment', 'market', 'general'
            );
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    op.execute("""
        DO $$ BEGIN
            CREATE TYPE forum_vote_type AS ENUM ('up', 'down');
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)

    # ========================================================================
    # FORUM_POSTS table
    # ========================================================================
    op.create_table(
        "forum_posts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("title", sa.String(length=300), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "category",
            postgresql.ENUM(
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
            server_default="general",
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("upvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("downvotes", sa.Integer(), server_default="0", nullable=False),
        sa.Column("comment_count", sa.Integer(), server_default="0", nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="forum_posts_upvotes_non_negative"),
        sa.CheckConstraint(
            "downvotes >= 0", name="forum_posts_downvotes_non_negative"
        ),
        sa.CheckConstraint(
            "comment_count >= 0", name="forum_posts_comment_count_non_negative"
        ),
    )
    op.create_index(
        "idx_forum_posts_created_at",
        "forum_posts",
        [sa.text("created_at DESC")],
    )
    op.create_index("idx_forum_posts_category", "forum_posts", ["category"])
    op.create_index("idx_forum_posts_user_id", "forum_posts", ["user_id"])

    # ========================================================================
    # FORUM_VOTES table (vote ledger)
    # ========================================================================
    op.create_table(
        "forum_votes",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column(
            "vote_type",
            postgresql.ENUM("up", "down", name="forum_vote_type", create_type=False),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["forum_posts.id"], ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "post_id", name="uq_forum_votes_user_post"),
    )
    op.create_index("idx_forum_votes_post_id", "forum_votes", ["post_id"])

    # ========================================================================
    # FORUM_COMMENTS table
    # ========================================================================
    op.create_table(
        "forum_comments",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("post_id", sa.UUID(), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("NOW()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["post_id"], ["forum_posts.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "length(btrim(content)) > 0", name="forum_comments_content_not_blank"
        ),
    )
    op.create_index(
        "idx_forum_comments_post_id_created_at",
        "forum_comments",
        ["post_id", "created_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("forum_comments")
    op.drop_table("forum_votes")
    op.drop_table("forum_posts")

    # Drop ENUM types
    op.execute("DROP TYPE IF EXISTS forum_vote_type")
    op.execute("DROP TYPE IF EXISTS forum_category")
