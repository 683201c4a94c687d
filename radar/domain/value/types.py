"""Domain enumerations for Talent Radar engagement."""

from enum import Enum


class UserRole(str, Enum):
    """Platform role of a user."""

    USER = "user"
    SCOUT = "scout"
    COACH = "coach"
    ADMIN = "admin"


class PollType(str, Enum):
    """How a poll is answered."""

    SINGLE_CHOICE = "single_choice"
    MULTIPLE_CHOICE = "multiple_choice"
    YES_NO = "yes_no"


class VoteType(str, Enum):
    """Direction of a vote on a reply or comment."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"

    @classmethod
    def from_flag(cls, is_upvote: bool) -> "VoteType":
        return cls.UPVOTE if is_upvote else cls.DOWNVOTE

    def opposite(self) -> "VoteType":
        return VoteType.DOWNVOTE if self is VoteType.UPVOTE else VoteType.UPVOTE


class VotableType(str, Enum):
    """Type of entity that can be voted on, reported or featured."""

    REPLY = "reply"
    PLAYER_COMMENT = "player_comment"


class VoteOutcome(str, Enum):
    """What a reply/comment vote did to the voter's ledger entry."""

    CAST = "cast"
    TOGGLED = "toggled"
    RETRACTED = "retracted"
