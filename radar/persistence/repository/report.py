"""PostgreSQL implementation of ContentReport repository."""

from typing import List
from uuid import UUID

from sqlalchemy import and_, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from radar.domain.model import ContentReport
from radar.domain.repository import ReportRepository
from radar.domain.value import VotableType
from radar.persistence.mappers import report_to_dict, row_to_report
from radar.persistence.tables import content_reports_table


class PostgresReportRepository(ReportRepository):
    """PostgreSQL implementation of ReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, report: ContentReport) -> ContentReport:
        await self.session.execute(
            insert(content_reports_table).values(**report_to_dict(report))
        )
        await self.session.flush()
        return report

    async def find_by_votable(
        self, votable_type: VotableType, votable_id: UUID
    ) -> List[ContentReport]:
        stmt = (
            select(content_reports_table)
            .where(
                and_(
                    content_reports_table.c.votable_type == votable_type.value,
                    content_reports_table.c.votable_id == votable_id,
                )
            )
            .order_by(content_reports_table.c.created_at)
        )
        result = await self.session.execute(stmt)
        return [row_to_report(row._asdict()) for row in result.fetchall()]
