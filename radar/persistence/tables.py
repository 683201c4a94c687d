"""SQLAlchemy table definitions for Talent Radar engagement.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.

The unique constraints on poll_votes and votes are what keep each
identity to one vote per target; application checks are only a fast path.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects import postgresql
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

from radar.domain.model.poll import MAX_OPTION_TEXT_LENGTH, MAX_QUESTION_LENGTH

# Metadata object for all tables
metadata = MetaData()

user_role_enum = postgresql.ENUM(
    "user", "scout", "coach", "admin", name="user_role", create_type=False
)
poll_type_enum = postgresql.ENUM(
    "single_choice", "multiple_choice", "yes_no", name="poll_type", create_type=False
)
votable_type_enum = postgresql.ENUM(
    "reply", "player_comment", name="votable_type", create_type=False
)
vote_type_enum = postgresql.ENUM(
    "upvote", "downvote", name="vote_type", create_type=False
)

# ============================================================================
# USERS TABLE (owned by the platform, read here)
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("username", String(50), nullable=False, unique=True),
    Column("role", user_role_enum, nullable=False, server_default="user"),
    Column("reputation_score", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("reputation_score >= 0", name="reputation_non_negative"),
)

# ============================================================================
# DISCUSSION THREADS / PLAYERS (reference data, looked up by ID only)
# ============================================================================
discussion_threads_table = Table(
    "discussion_threads",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("title", String(200), nullable=False),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

players_table = Table(
    "players",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("name", String(100), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

# ============================================================================
# POLLS
# ============================================================================
polls_table = Table(
    "polls",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("question", String(MAX_QUESTION_LENGTH), nullable=False),
    Column("description", Text, nullable=True),
    Column("poll_type", poll_type_enum, nullable=False, server_default="single_choice"),
    Column(
        "thread_id",
        UUID,
        ForeignKey("discussion_threads.id", ondelete="SET NULL"),
        nullable=True,
    ),
    Column(
        "player_id", UUID, ForeignKey("players.id", ondelete="SET NULL"), nullable=True
    ),
    Column("is_anonymous", Boolean, nullable=False, server_default="false"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("total_votes", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("total_votes >= 0", name="poll_total_votes_non_negative"),
)

Index("idx_polls_active_created", polls_table.c.is_active, polls_table.c.created_at)
Index("idx_polls_player_id", polls_table.c.player_id)
Index("idx_polls_thread_id", polls_table.c.thread_id)

poll_options_table = Table(
    "poll_options",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "poll_id", UUID, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False
    ),
    Column("option_text", String(MAX_OPTION_TEXT_LENGTH), nullable=False),
    Column("vote_count", Integer, nullable=False, server_default="0"),
    Column("display_order", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    CheckConstraint("vote_count >= 0", name="option_vote_count_non_negative"),
)

Index(
    "idx_poll_options_poll_order",
    poll_options_table.c.poll_id,
    poll_options_table.c.display_order,
)

poll_votes_table = Table(
    "poll_votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "poll_id", UUID, ForeignKey("polls.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "option_id",
        UUID,
        ForeignKey("poll_options.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("voter_key", String(300), nullable=False),  # user:<id> or ip:<address>
    Column("user_id", UUID, ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
    Column("ip_address", String(64), nullable=True),
    Column("user_agent", Text, nullable=True),
    Column("is_anonymous", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("poll_id", "voter_key", name="unique_poll_vote"),
)

Index("idx_poll_votes_option_id", poll_votes_table.c.option_id)

# ============================================================================
# VOTABLE CONTENT: DISCUSSION REPLIES / PLAYER COMMENTS
# ============================================================================
discussion_replies_table = Table(
    "discussion_replies",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "thread_id",
        UUID,
        ForeignKey("discussion_threads.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id",
        UUID,
        ForeignKey("discussion_replies.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("upvotes >= 0", name="reply_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="reply_downvotes_non_negative"),
)

Index("idx_discussion_replies_thread_id", discussion_replies_table.c.thread_id)
Index("idx_discussion_replies_parent_id", discussion_replies_table.c.parent_id)

player_comments_table = Table(
    "player_comments",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column(
        "player_id", UUID, ForeignKey("players.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "author_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "parent_id",
        UUID,
        ForeignKey("player_comments.id", ondelete="CASCADE"),
        nullable=True,
    ),
    Column("content", Text, nullable=False),
    Column("upvotes", Integer, nullable=False, server_default="0"),
    Column("downvotes", Integer, nullable=False, server_default="0"),
    Column("is_featured", Boolean, nullable=False, server_default="false"),
    Column("is_deleted", Boolean, nullable=False, server_default="false"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("deleted_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint("upvotes >= 0", name="comment_upvotes_non_negative"),
    CheckConstraint("downvotes >= 0", name="comment_downvotes_non_negative"),
)

Index("idx_player_comments_player_id", player_comments_table.c.player_id)
Index("idx_player_comments_parent_id", player_comments_table.c.parent_id)

# ============================================================================
# VOTES TABLE (replies and player comments)
# ============================================================================
votes_table = Table(
    "votes",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("user_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
    Column("votable_type", votable_type_enum, nullable=False),
    Column("votable_id", UUID, nullable=False),
    Column("vote_type", vote_type_enum, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("user_id", "votable_type", "votable_id", name="unique_vote"),
)

Index("idx_votes_user_id", votes_table.c.user_id)
Index("idx_votes_votable", votes_table.c.votable_type, votes_table.c.votable_id)

# ============================================================================
# CONTENT REPORTS
# ============================================================================
content_reports_table = Table(
    "content_reports",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("votable_type", votable_type_enum, nullable=False),
    Column("votable_id", UUID, nullable=False),
    Column(
        "reporter_id", UUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("reason", String(500), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index(
    "idx_content_reports_votable",
    content_reports_table.c.votable_type,
    content_reports_table.c.votable_id,
)
