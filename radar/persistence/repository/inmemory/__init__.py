"""In-memory repository implementations for testing."""

from .poll import InMemoryPollRepository, InMemoryPollVoteRepository
from .reference import InMemoryPlayerRepository, InMemoryThreadRepository
from .report import InMemoryReportRepository
from .unit_of_work import InMemoryUnitOfWork
from .user import InMemoryUserRepository
from .votable import InMemoryPlayerCommentRepository, InMemoryReplyRepository
from .vote import InMemoryVoteRepository

__all__ = [
    "InMemoryPlayerCommentRepository",
    "InMemoryPlayerRepository",
    "InMemoryPollRepository",
    "InMemoryPollVoteRepository",
    "InMemoryReplyRepository",
    "InMemoryReportRepository",
    "InMemoryThreadRepository",
    "InMemoryUnitOfWork",
    "InMemoryUserRepository",
    "InMemoryVoteRepository",
]
