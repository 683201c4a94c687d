"""Repository interfaces for the Talent Radar engagement domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from radar.domain.repository.poll import PollRepository, PollVoteRepository
from radar.domain.repository.reference import PlayerRepository, ThreadRepository
from radar.domain.repository.report import ReportRepository
from radar.domain.repository.unit_of_work import UnitOfWork
from radar.domain.repository.user import UserRepository
from radar.domain.repository.votable import (
    PlayerCommentRepository,
    ReplyRepository,
    VotableRepository,
)
from radar.domain.repository.vote import VoteRepository

__all__ = [
    "UserRepository",
    "ThreadRepository",
    "PlayerRepository",
    "PollRepository",
    "PollVoteRepository",
    "VotableRepository",
    "ReplyRepository",
    "PlayerCommentRepository",
    "VoteRepository",
    "ReportRepository",
    "UnitOfWork",
]
