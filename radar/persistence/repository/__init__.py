"""PostgreSQL repository implementations."""

from radar.persistence.repository.poll import (
    PostgresPollRepository,
    PostgresPollVoteRepository,
)
from radar.persistence.repository.reference import (
    PostgresPlayerRepository,
    PostgresThreadRepository,
)
from radar.persistence.repository.report import PostgresReportRepository
from radar.persistence.repository.user import PostgresUserRepository
from radar.persistence.repository.votable import (
    PostgresPlayerCommentRepository,
    PostgresReplyRepository,
)
from radar.persistence.repository.vote import PostgresVoteRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresThreadRepository",
    "PostgresPlayerRepository",
    "PostgresPollRepository",
    "PostgresPollVoteRepository",
    "PostgresReplyRepository",
    "PostgresPlayerCommentRepository",
    "PostgresVoteRepository",
    "PostgresReportRepository",
]
