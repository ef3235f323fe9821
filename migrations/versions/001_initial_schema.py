"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "episodes",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("video_id", sa.String(20), nullable=False, unique=True),
        sa.Column("number", sa.Integer(), nullable=False, unique=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("published_at", sa.DateTime(timezone=True)),
        sa.Column("thumbnail", sa.String()),
        sa.Column("transcript", sa.JSON(), nullable=False),
        sa.Column("summary", sa.Text(), nullable=False, server_default=""),
        sa.Column("highlights", sa.JSON(), nullable=False),
        sa.Column("comics", sa.JSON(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )
    op.create_index("ix_episodes_video_id", "episodes", ["video_id"])
    op.create_index("ix_episodes_number", "episodes", ["number"])
    op.create_index("ix_episodes_published_at", "episodes", ["published_at"])

    op.create_table(
        "comedians",
        sa.Column("key", sa.String(150), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("bio", sa.Text()),
        sa.Column("image_url", sa.String()),
        sa.Column("instagram", sa.String(200), nullable=False, server_default=""),
        sa.Column("website", sa.String(200), nullable=False, server_default=""),
        sa.Column("youtube", sa.String(200), nullable=False, server_default=""),
        sa.Column("twitter", sa.String(200), nullable=False, server_default=""),
        sa.Column("total_appearances", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("first_appearance", sa.DateTime(timezone=True)),
        sa.Column("last_appearance", sa.DateTime(timezone=True)),
        sa.Column("golden_ticket", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("regular_guest", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("hall_of_fame", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )

    op.create_table(
        "performances",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("comedian_key", sa.String(150), nullable=False),
        sa.Column("episode_id", sa.Uuid(), nullable=False),
        sa.Column("start_time", sa.String(8), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["comedian_key"], ["comedians.key"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["episode_id"], ["episodes.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_performances_comedian_key", "performances", ["comedian_key"])
    op.create_index("ix_performances_episode_id", "performances", ["episode_id"])

    op.create_table(
        "reviews",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("episode_id", sa.Uuid()),
        sa.Column("comedian_key", sa.String(150)),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("user_name", sa.String(200), nullable=False, server_default="Anonymous"),
        sa.Column("rating", sa.Integer()),
        sa.Column("comment", sa.Text(), nullable=False, server_default=""),
        sa.Column("parent_id", sa.Uuid()),
        sa.Column("replies", sa.JSON(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upvoted_by", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["episode_id"], ["episodes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["comedian_key"], ["comedians.key"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["parent_id"], ["reviews.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_reviews_episode_id", "reviews", ["episode_id"])
    op.create_index("ix_reviews_comedian_key", "reviews", ["comedian_key"])
    op.create_index("ix_reviews_parent_id", "reviews", ["parent_id"])

    op.create_table(
        "moments",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("episode_id", sa.Uuid(), nullable=False),
        sa.Column("timestamp", sa.String(8), nullable=False),
        sa.Column("title", sa.String(200)),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(30), nullable=False, server_default="other"),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("user_id", sa.String(128), nullable=False),
        sa.Column("user_name", sa.String(200), nullable=False, server_default="Anonymous"),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("upvoted_by", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.ForeignKeyConstraint(["episode_id"], ["episodes.id"], ondelete="CASCADE"),
    )
    op.create_index("ix_moments_episode_id", "moments", ["episode_id"])
    op.create_index("ix_moments_category", "moments", ["category"])

    op.create_table(
        "users",
        sa.Column("uid", sa.String(128), primary_key=True),
        sa.Column("display_name", sa.String(200)),
        sa.Column("email", sa.String(320)),
        sa.Column("photo_url", sa.String()),
        sa.Column("custom_claims", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )

    op.create_table(
        "admins",
        sa.Column("uid", sa.String(128), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()")),
    )


def downgrade() -> None:
    op.drop_table("admins")
    op.drop_table("users")
    op.drop_table("moments")
    op.drop_table("reviews")
    op.drop_table("performances")
    op.drop_table("comedians")
    op.drop_table("episodes")
