"""initial_engagement_schema

Create the engagement schema for Talent Radar:
- Users, discussion threads and players (reference data owned by the platform)
- Polls, poll options and the poll vote ledger
- Discussion replies and player comments (votable content)
- Votes (upvote/downvote on replies and comments)
- Content reports

Revision ID: 3c1f7a9d2e40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f7a9d2e40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ENUM_TYPES = {
    "user_role": ("user", "scout", "coach", "admin"),
    "poll_type": ("single_choice", "multiple_choice", "yes_no"),
    "votable_type": ("reply", "player_comment"),
    "vote_type": ("upvote", "downvote"),
}


def _enum(name: str) -> postgresql.ENUM:
    return postgresql.ENUM(*ENUM_TYPES[name], name=name, create_type=False)


def _id_column() -> sa.Column:
    return sa.Column(
        "id",
        sa.UUID(),
        server_default=sa.text("uuid_generate_v4()"),
        nullable=False,
    )


def _timestamp_column(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def _votable_columns() -> list:
    return [
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("upvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("downvotes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_deleted", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.Column("deleted_at", sa.TIMESTAMP(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    for name, values in ENUM_TYPES.items():
        labels = ", ".join(f"'{value}'" for value in values)
        op.execute(f"""
            DO $$ BEGIN
                CREATE TYPE {name} AS ENUM ({labels});
            EXCEPTION
                WHEN duplicate_object THEN null;
            END $$;
        """)

    # ========================================================================
    # REFERENCE TABLES
    # ========================================================================
    op.create_table(
        "users",
        _id_column(),
        sa.Column("username", sa.String(50), nullable=False),
        sa.Column(
            "role", _enum("user_role"), nullable=False, server_default="user"
        ),
        sa.Column("reputation_score", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.CheckConstraint("reputation_score >= 0", name="reputation_non_negative"),
    )

    op.create_table(
        "discussion_threads",
        _id_column(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("author_id", sa.UUID(), nullable=False),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )

    op.create_table(
        "players",
        _id_column(),
        sa.Column("name", sa.String(100), nullable=False),
        _timestamp_column("created_at"),
        sa.PrimaryKeyConstraint("id"),
    )

    # ========================================================================
    # POLLS
    # ========================================================================
    op.create_table(
        "polls",
        _id_column(),
        sa.Column("author_id", sa.UUID(), nullable=False),
        sa.Column("question", sa.String(300), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "poll_type",
            _enum("poll_type"),
            nullable=False,
            server_default="single_choice",
        ),
        sa.Column("thread_id", sa.UUID(), nullable=True),
        sa.Column("player_id", sa.UUID(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("total_votes", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["thread_id"], ["discussion_threads.id"], ondelete="SET NULL"
        ),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("total_votes >= 0", name="poll_total_votes_non_negative"),
    )
    op.create_index("idx_polls_active_created", "polls", ["is_active", "created_at"])
    op.create_index("idx_polls_player_id", "polls", ["player_id"])
    op.create_index("idx_polls_thread_id", "polls", ["thread_id"])

    op.create_table(
        "poll_options",
        _id_column(),
        sa.Column("poll_id", sa.UUID(), nullable=False),
        sa.Column("option_text", sa.String(200), nullable=False),
        sa.Column("vote_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("display_order", sa.Integer(), nullable=False, server_default="0"),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("vote_count >= 0", name="option_vote_count_non_negative"),
    )
    op.create_index(
        "idx_poll_options_poll_order", "poll_options", ["poll_id", "display_order"]
    )

    op.create_table(
        "poll_votes",
        _id_column(),
        sa.Column("poll_id", sa.UUID(), nullable=False),
        sa.Column("option_id", sa.UUID(), nullable=False),
        sa.Column("voter_key", sa.String(300), nullable=False),
        sa.Column("user_id", sa.UUID(), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("user_agent", sa.Text(), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default="false"),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["poll_id"], ["polls.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["option_id"], ["poll_options.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        # One vote per identity per poll
        sa.UniqueConstraint("poll_id", "voter_key", name="unique_poll_vote"),
    )
    op.create_index("idx_poll_votes_option_id", "poll_votes", ["option_id"])

    # ========================================================================
    # VOTABLE CONTENT
    # ========================================================================
    op.create_table(
        "discussion_replies",
        _id_column(),
        sa.Column("thread_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        *_votable_columns(),
        sa.ForeignKeyConstraint(
            ["thread_id"], ["discussion_threads.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["discussion_replies.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="reply_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="reply_downvotes_non_negative"),
    )
    op.create_index(
        "idx_discussion_replies_thread_id", "discussion_replies", ["thread_id"]
    )
    op.create_index(
        "idx_discussion_replies_parent_id", "discussion_replies", ["parent_id"]
    )

    op.create_table(
        "player_comments",
        _id_column(),
        sa.Column("player_id", sa.UUID(), nullable=False),
        sa.Column("parent_id", sa.UUID(), nullable=True),
        *_votable_columns(),
        sa.ForeignKeyConstraint(["player_id"], ["players.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["player_comments.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint("upvotes >= 0", name="comment_upvotes_non_negative"),
        sa.CheckConstraint("downvotes >= 0", name="comment_downvotes_non_negative"),
    )
    op.create_index("idx_player_comments_player_id", "player_comments", ["player_id"])
    op.create_index("idx_player_comments_parent_id", "player_comments", ["parent_id"])

    # ========================================================================
    # VOTES table (polymorphic: replies and player comments)
    # ========================================================================
    op.create_table(
        "votes",
        _id_column(),
        sa.Column("user_id", sa.UUID(), nullable=False),
        sa.Column("votable_type", _enum("votable_type"), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("vote_type", _enum("vote_type"), nullable=False),
        _timestamp_column("created_at"),
        _timestamp_column("updated_at"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        # One vote per user per item
        sa.UniqueConstraint(
            "user_id", "votable_type", "votable_id", name="unique_vote"
        ),
    )
    op.create_index("idx_votes_user_id", "votes", ["user_id"])
    op.create_index("idx_votes_votable", "votes", ["votable_type", "votable_id"])

    # ========================================================================
    # CONTENT REPORTS
    # ========================================================================
    op.create_table(
        "content_reports",
        _id_column(),
        sa.Column("votable_type", _enum("votable_type"), nullable=False),
        sa.Column("votable_id", sa.UUID(), nullable=False),
        sa.Column("reporter_id", sa.UUID(), nullable=False),
        sa.Column("reason", sa.String(500), nullable=False),
        _timestamp_column("created_at"),
        sa.ForeignKeyConstraint(["reporter_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "idx_content_reports_votable",
        "content_reports",
        ["votable_type", "votable_id"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("content_reports")
    op.drop_table("votes")
    op.drop_table("player_comments")
    op.drop_table("discussion_replies")
    op.drop_table("poll_votes")
    op.drop_table("poll_options")
    op.drop_table("polls")
    op.drop_table("players")
    op.drop_table("discussion_threads")
    op.drop_table("users")

    for name in reversed(list(ENUM_TYPES)):
        op.execute(f"DROP TYPE IF EXISTS {name}")
