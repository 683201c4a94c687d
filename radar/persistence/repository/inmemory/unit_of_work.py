"""In-memory unit of work for testing."""

import copy
from typing import Any, Dict, List, Sequence

from radar.domain.repository import UnitOfWork


class InMemoryUnitOfWork(UnitOfWork):
    """Snapshots in-memory stores on begin and restores them on rollback.

    Stores keep frozen models in dicts and lists, so a shallow copy of
    each container is a full snapshot. Transactions are expected to run
    one at a time.
    """

    def __init__(self, stores: Sequence[Any]) -> None:
        self._stores = list(stores)
        self._snapshots: List[Dict[str, Any]] = []

    async def begin(self) -> None:
        self._snapshots = [
            {
                name: copy.copy(value)
                for name, value in vars(store).items()
                if isinstance(value, (dict, list))
            }
            for store in self._stores
        ]

    async def commit(self) -> None:
        self._snapshots = []

    async def rollback(self) -> None:
        for store, snapshot in zip(self._stores, self._snapshots):
            for name, value in snapshot.items():
                setattr(store, name, value)
        self._snapshots = []
