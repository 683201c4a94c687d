"""Domain services."""

from .base import Service
from .content_service import ContentService
from .content_vote_service import ContentVoteService, VoteResult
from .jwt_service import JWTService
from .moderation_service import ModerationService
from .poll_service import OptionResult, PollResults, PollService
from .user_service import UserService

__all__ = [
    "ContentService",
    "ContentVoteService",
    "JWTService",
    "ModerationService",
    "OptionResult",
    "PollResults",
    "PollService",
    "Service",
    "UserService",
    "VoteResult",
]
