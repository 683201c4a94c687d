"""In-memory content report repository for testing."""

from uuid import UUID

from radar.domain.model.report import ContentReport
from radar.domain.repository.report import ReportRepository
from radar.domain.value import VotableType


class InMemoryReportRepository(ReportRepository):
    """In-memory implementation of ReportRepository for testing."""

    def __init__(self) -> None:
        self._reports: list[ContentReport] = []

    async def save(self, report: ContentReport) -> ContentReport:
        self._reports.append(report)
        return report

    async def find_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> list[ContentReport]:
        return [
            r
            for r in self._reports
            if r.votable_type == votable_type and r.votable_id == votable_id
        ]
