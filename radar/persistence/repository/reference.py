"""PostgreSQL implementations of thread and player lookups."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from radar.domain.model import DiscussionThread, Player
from radar.domain.repository import PlayerRepository, ThreadRepository
from radar.domain.value import PlayerId, ThreadId
from radar.persistence.mappers import row_to_player, row_to_thread
from radar.persistence.tables import discussion_threads_table, players_table


class PostgresThreadRepository(ThreadRepository):
    """PostgreSQL implementation of ThreadRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, thread_id: ThreadId) -> Optional[DiscussionThread]:
        stmt = select(discussion_threads_table).where(
            discussion_threads_table.c.id == thread_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_thread(row._asdict()) if row else None

    async def save(self, thread: DiscussionThread) -> DiscussionThread:
        stmt = (
            insert(discussion_threads_table)
            .values(**thread.model_dump())
            .on_conflict_do_nothing(index_elements=[discussion_threads_table.c.id])
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return thread


class PostgresPlayerRepository(PlayerRepository):
    """PostgreSQL implementation of PlayerRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, player_id: PlayerId) -> Optional[Player]:
        stmt = select(players_table).where(players_table.c.id == player_id)
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_player(row._asdict()) if row else None

    async def save(self, player: Player) -> Player:
        stmt = (
            insert(players_table)
            .values(**player.model_dump())
            .on_conflict_do_nothing(index_elements=[players_table.c.id])
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return player
