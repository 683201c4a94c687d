"""Domain model entities for Talent Radar engagement."""

from radar.domain.model.player import Player
from radar.domain.model.poll import Poll, PollOption
from radar.domain.model.poll_vote import PollVote
from radar.domain.model.report import ContentReport
from radar.domain.model.thread import DiscussionThread
from radar.domain.model.user import User
from radar.domain.model.votable import DiscussionReply, PlayerComment, VotableContent
from radar.domain.model.vote import Vote

__all__ = [
    "User",
    "DiscussionThread",
    "Player",
    "Poll",
    "PollOption",
    "PollVote",
    "VotableContent",
    "DiscussionReply",
    "PlayerComment",
    "Vote",
    "ContentReport",
]
