"""Content report repository interface."""

from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from radar.domain.model.report import ContentReport
from radar.domain.value import VotableType


class ReportRepository(ABC):
    """Repository for ContentReport entity."""

    @abstractmethod
    async def save(self, report: ContentReport) -> ContentReport:
        """Save a report (create)."""
        pass

    @abstractmethod
    async def find_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> List[ContentReport]:
        """Find reports filed against an item, oldest first."""
        pass
