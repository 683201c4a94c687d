"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator


class UnitOfWork(ABC):
    """Transaction boundary for one use case.

    Everything written inside ``transaction()`` is committed when the block
    exits normally and rolled back when any exception leaves it, domain
    errors included.
    """

    @abstractmethod
    async def begin(self) -> None:
        """Start tracking writes."""
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make writes since ``begin`` permanent."""
        pass

    @abstractmethod
    async def rollback(self) -> None:
        """Discard writes since ``begin``."""
        pass

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Run the block as one all-or-nothing transaction."""
        await self.begin()
        try:
            yield
        except Exception:
            await self.rollback()
            raise
        await self.commit()
