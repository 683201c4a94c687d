"""Strongly typed identifiers for Talent Radar domain entities.

Using NewType for strong typing prevents mixing up different entity IDs
and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

# Collaborator identifiers
UserId = NewType("UserId", UUID)
ThreadId = NewType("ThreadId", UUID)
PlayerId = NewType("PlayerId", UUID)

# Poll engine identifiers
PollId = NewType("PollId", UUID)
PollOptionId = NewType("PollOptionId", UUID)
PollVoteId = NewType("PollVoteId", UUID)

# Reply/comment voting identifiers
ReplyId = NewType("ReplyId", UUID)
CommentId = NewType("CommentId", UUID)
VoteId = NewType("VoteId", UUID)
ReportId = NewType("ReportId", UUID)
