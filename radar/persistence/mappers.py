"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from radar.domain.model import (
    ContentReport,
    DiscussionReply,
    DiscussionThread,
    Player,
    PlayerComment,
    Poll,
    PollOption,
    PollVote,
    User,
    VotableContent,
    Vote,
)
from radar.domain.value import (
    CommentId,
    PlayerId,
    PollId,
    PollOptionId,
    PollType,
    PollVoteId,
    ReplyId,
    ReportId,
    ThreadId,
    UserId,
    UserRole,
    VotableType,
    VoteId,
    VoteType,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(_uuid(row["id"])),
        username=row["username"],
        role=UserRole(row["role"]),
        reputation_score=row["reputation_score"],
        created_at=row["created_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_thread(row: Dict[str, Any]) -> DiscussionThread:
    return DiscussionThread(
        id=ThreadId(_uuid(row["id"])),
        title=row["title"],
        author_id=UserId(_uuid(row["author_id"])),
        created_at=row["created_at"],
    )


def row_to_player(row: Dict[str, Any]) -> Player:
    return Player(
        id=PlayerId(_uuid(row["id"])),
        name=row["name"],
        created_at=row["created_at"],
    )


def row_to_poll(row: Dict[str, Any]) -> Poll:
    """Convert database row to Poll domain model.

    Args:
        row: Database row as dict

    Returns:
        Poll domain model
    """
    thread_id = _optional_uuid(row.get("thread_id"))
    player_id = _optional_uuid(row.get("player_id"))
    return Poll(
        id=PollId(_uuid(row["id"])),
        author_id=UserId(_uuid(row["author_id"])),
        question=row["question"],
        description=row.get("description"),
        poll_type=PollType(row["poll_type"]),
        thread_id=ThreadId(thread_id) if thread_id else None,
        player_id=PlayerId(player_id) if player_id else None,
        is_anonymous=row["is_anonymous"],
        is_active=row["is_active"],
        expires_at=row.get("expires_at"),
        total_votes=row["total_votes"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def poll_to_dict(poll: Poll) -> Dict[str, Any]:
    """Convert Poll domain model to database dict.

    Args:
        poll: Poll domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = poll.model_dump()
    data["poll_type"] = poll.poll_type.value
    return data


def row_to_poll_option(row: Dict[str, Any]) -> PollOption:
    return PollOption(
        id=PollOptionId(_uuid(row["id"])),
        poll_id=PollId(_uuid(row["poll_id"])),
        option_text=row["option_text"],
        vote_count=row["vote_count"],
        display_order=row["display_order"],
        created_at=row["created_at"],
    )


def poll_option_to_dict(option: PollOption) -> Dict[str, Any]:
    return option.model_dump()


def row_to_poll_vote(row: Dict[str, Any]) -> PollVote:
    """Convert database row to PollVote domain model.

    Args:
        row: Database row as dict

    Returns:
        PollVote domain model
    """
    user_id = _optional_uuid(row.get("user_id"))
    return PollVote(
        id=PollVoteId(_uuid(row["id"])),
        poll_id=PollId(_uuid(row["poll_id"])),
        option_id=PollOptionId(_uuid(row["option_id"])),
        voter_key=row["voter_key"],
        user_id=UserId(user_id) if user_id else None,
        ip_address=row.get("ip_address"),
        user_agent=row.get("user_agent"),
        is_anonymous=row["is_anonymous"],
        created_at=row["created_at"],
    )


def poll_vote_to_dict(vote: PollVote) -> Dict[str, Any]:
    return vote.model_dump()


def _votable_fields(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "author_id": UserId(_uuid(row["author_id"])),
        "content": row["content"],
        "upvotes": row["upvotes"],
        "downvotes": row["downvotes"],
        "is_featured": row["is_featured"],
        "is_deleted": row["is_deleted"],
        "created_at": row["created_at"],
        "updated_at": row["updated_at"],
        "deleted_at": row.get("deleted_at"),
    }


def row_to_reply(row: Dict[str, Any]) -> DiscussionReply:
    """Convert database row to DiscussionReply domain model.

    Args:
        row: Database row as dict

    Returns:
        DiscussionReply domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return DiscussionReply(
        id=ReplyId(_uuid(row["id"])),
        thread_id=ThreadId(_uuid(row["thread_id"])),
        parent_id=ReplyId(parent_id) if parent_id else None,
        **_votable_fields(row),
    )


def row_to_player_comment(row: Dict[str, Any]) -> PlayerComment:
    """Convert database row to PlayerComment domain model.

    Args:
        row: Database row as dict

    Returns:
        PlayerComment domain model
    """
    parent_id = _optional_uuid(row.get("parent_id"))
    return PlayerComment(
        id=CommentId(_uuid(row["id"])),
        player_id=PlayerId(_uuid(row["player_id"])),
        parent_id=CommentId(parent_id) if parent_id else None,
        **_votable_fields(row),
    )


def votable_to_dict(content: VotableContent) -> Dict[str, Any]:
    """Convert a reply or comment to a database dict.

    ``votable_type`` is a model discriminator, not a column.
    """
    return content.model_dump(exclude={"votable_type"})


def row_to_vote(row: Dict[str, Any]) -> Vote:
    """Convert database row to Vote domain model.

    Args:
        row: Database row as dict

    Returns:
        Vote domain model
    """
    return Vote(
        id=VoteId(_uuid(row["id"])),
        user_id=UserId(_uuid(row["user_id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        vote_type=VoteType(row["vote_type"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def vote_to_dict(vote: Vote) -> Dict[str, Any]:
    """Convert Vote domain model to database dict.

    Args:
        vote: Vote domain model

    Returns:
        Dict suitable for database insertion/update
    """
    data = vote.model_dump()
    data["votable_type"] = vote.votable_type.value
    data["vote_type"] = vote.vote_type.value
    return data


def row_to_report(row: Dict[str, Any]) -> ContentReport:
    return ContentReport(
        id=ReportId(_uuid(row["id"])),
        votable_type=VotableType(row["votable_type"]),
        votable_id=_uuid(row["votable_id"]),
        reporter_id=UserId(_uuid(row["reporter_id"])),
        reason=row["reason"],
        created_at=row["created_at"],
    )


def report_to_dict(report: ContentReport) -> Dict[str, Any]:
    data = report.model_dump()
    data["votable_type"] = report.votable_type.value
    return data
