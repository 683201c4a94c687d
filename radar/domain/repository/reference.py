"""Reference data repository interfaces.

Threads and players are owned by other parts of the platform. The
engagement core only needs to confirm they exist.
"""

from abc import ABC, abstractmethod
from typing import Optional

from radar.domain.model.player import Player
from radar.domain.model.thread import DiscussionThread
from radar.domain.value import PlayerId, ThreadId


class ThreadRepository(ABC):
    """Repository for DiscussionThread entity."""

    @abstractmethod
    async def find_by_id(self, thread_id: ThreadId) -> Optional[DiscussionThread]:
        """Find a thread by ID."""
        pass

    @abstractmethod
    async def save(self, thread: DiscussionThread) -> DiscussionThread:
        """Save a thread (create or update)."""
        pass


class PlayerRepository(ABC):
    """Repository for Player entity."""

    @abstractmethod
    async def find_by_id(self, player_id: PlayerId) -> Optional[Player]:
        """Find a player by ID."""
        pass

    @abstractmethod
    async def save(self, player: Player) -> Player:
        """Save a player (create or update)."""
        pass
