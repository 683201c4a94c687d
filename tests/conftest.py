"""Test configuration and fixtures."""

from uuid import uuid4

import logfire
import pytest

from radar.domain.model import (
    DiscussionReply,
    DiscussionThread,
    Player,
    PlayerComment,
    User,
)
from radar.domain.value import (
    CommentId,
    PlayerId,
    ReplyId,
    ThreadId,
    UserId,
    UserRole,
)


@pytest.fixture(scope="session", autouse=True)
def configure_logfire_for_tests():
    """Keep spans and logs local while tests run."""
    logfire.configure(send_to_logfire=False, console=False)


def make_user(
    role: UserRole = UserRole.USER,
    reputation_score: int = 0,
    username: str | None = None,
) -> User:
    """Helper to build a user with a unique username."""
    user_id = UserId(uuid4())
    return User(
        id=user_id,
        username=username or f"user-{str(user_id)[:8]}",
        role=role,
        reputation_score=reputation_score,
    )


def make_thread(author_id: UserId) -> DiscussionThread:
    return DiscussionThread(
        id=ThreadId(uuid4()), title="Best young strikers", author_id=author_id
    )


def make_player(name: str = "Test Player") -> Player:
    return Player(id=PlayerId(uuid4()), name=name)


def make_reply(
    thread_id: ThreadId, author_id: UserId, content: str = "Great finisher"
) -> DiscussionReply:
    return DiscussionReply(
        id=ReplyId(uuid4()),
        thread_id=thread_id,
        author_id=author_id,
        content=content,
    )


def make_comment(
    player_id: PlayerId, author_id: UserId, content: str = "Quick feet"
) -> PlayerComment:
    return PlayerComment(
        id=CommentId(uuid4()),
        player_id=player_id,
        author_id=author_id,
        content=content,
    )
