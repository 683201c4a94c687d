"""Domain value objects for Talent Radar."""

from radar.domain.value.identifiers import (
    CommentId,
    PlayerId,
    PollId,
    PollOptionId,
    PollVoteId,
    ReplyId,
    ReportId,
    ThreadId,
    UserId,
    VoteId,
)
from radar.domain.value.identity import AnonymousIdentity, Identity, RegisteredIdentity
from radar.domain.value.types import (
    PollType,
    UserRole,
    VotableType,
    VoteOutcome,
    VoteType,
)

__all__ = [
    # Identifiers
    "UserId",
    "ThreadId",
    "PlayerId",
    "PollId",
    "PollOptionId",
    "PollVoteId",
    "ReplyId",
    "CommentId",
    "VoteId",
    "ReportId",
    # Identity
    "Identity",
    "RegisteredIdentity",
    "AnonymousIdentity",
    # Types
    "UserRole",
    "PollType",
    "VoteType",
    "VotableType",
    "VoteOutcome",
]
