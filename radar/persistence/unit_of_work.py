"""Unit of work over the request's database session."""

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from radar.domain.repository import UnitOfWork


class SessionUnitOfWork(UnitOfWork):
    """Commits or rolls back the shared AsyncSession.

    Repositories for the same request hold the same session, so every
    statement they issue lands in this transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def begin(self) -> None:
        # The session autobegins on its first statement.
        pass

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        logfire.warn("Session rollback")
        await self.session.rollback()
