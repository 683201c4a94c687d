"""In-memory thread and player repositories for testing."""

from typing import Optional

from radar.domain.model.player import Player
from radar.domain.model.thread import DiscussionThread
from radar.domain.repository.reference import PlayerRepository, ThreadRepository
from radar.domain.value import PlayerId, ThreadId


class InMemoryThreadRepository(ThreadRepository):
    """In-memory implementation of ThreadRepository for testing."""

    def __init__(self) -> None:
        self._threads: dict[ThreadId, DiscussionThread] = {}

    async def find_by_id(self, thread_id: ThreadId) -> Optional[DiscussionThread]:
        return self._threads.get(thread_id)

    async def save(self, thread: DiscussionThread) -> DiscussionThread:
        self._threads[thread.id] = thread
        return thread


class InMemoryPlayerRepository(PlayerRepository):
    """In-memory implementation of PlayerRepository for testing."""

    def __init__(self) -> None:
        self._players: dict[PlayerId, Player] = {}

    async def find_by_id(self, player_id: PlayerId) -> Optional[Player]:
        return self._players.get(player_id)

    async def save(self, player: Player) -> Player:
        self._players[player.id] = player
        return player
