"""Moderation side effects on replies and comments."""

from uuid import UUID, uuid4

import logfire

from radar.config import ModerationSettings
from radar.domain.error import AuthorizationError, ValidationError
from radar.domain.model import ContentReport, User, VotableContent
from radar.domain.model.common import utcnow
from radar.domain.repository import ReportRepository
from radar.domain.value import ReportId, UserId, VotableType

from .base import Service
from .content_service import ContentService, describe
from .user_service import UserService

MAX_REASON_LENGTH = 500


class ModerationService(Service):
    """Domain service for reporting, featuring and deleting content.

    None of these operations touch vote counters.
    """

    def __init__(
        self,
        content_service: ContentService,
        report_repository: ReportRepository,
        user_service: UserService,
        moderation_settings: ModerationSettings,
    ) -> None:
        """Initialize moderation service.

        Args:
            content_service: Content domain service
            report_repository: Report repository
            user_service: User domain service
            moderation_settings: Moderation capability rules
        """
        self.content_service = content_service
        self.report_repository = report_repository
        self.user_service = user_service
        self.moderation_settings = moderation_settings

    @property
    def _threshold(self) -> int:
        return self.moderation_settings.scout_reputation_threshold

    async def report(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        reporter_id: UserId,
        reason: str,
    ) -> ContentReport:
        """File a report against a reply or comment.

        Args:
            votable_type: Reply or player comment
            votable_id: Target ID
            reporter_id: Reporting user
            reason: Why it is being reported

        Returns:
            Recorded report

        Raises:
            ValidationError: If the reason is blank or too long
            NotFoundError: If the reporter or target does not exist
        """
        with logfire.span(
            "moderation_service.report",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            reporter_id=str(reporter_id),
        ):
            reason = (reason or "").strip()
            if not reason:
                raise ValidationError("Report reason is required")
            if len(reason) > MAX_REASON_LENGTH:
                raise ValidationError(
                    f"Report reason must be at most {MAX_REASON_LENGTH} characters"
                )

            await self.user_service.get_by_id(reporter_id)
            await self.content_service.get_content(votable_type, votable_id)

            report = await self.report_repository.save(
                ContentReport(
                    id=ReportId(uuid4()),
                    votable_type=votable_type,
                    votable_id=votable_id,
                    reporter_id=reporter_id,
                    reason=reason,
                    created_at=utcnow(),
                )
            )
            # Moderators pick reports up from the log stream
            logfire.warn(
                "Content reported",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                reporter_id=str(reporter_id),
                reason=reason,
            )
            return report

    async def feature(
        self, votable_type: VotableType, votable_id: UUID, requester_id: UserId
    ) -> VotableContent:
        """Mark a reply or comment as featured.

        Raises:
            NotFoundError: If requester or target not found
            AuthorizationError: If requester cannot moderate
        """
        return await self._set_featured(votable_type, votable_id, requester_id, True)

    async def unfeature(
        self, votable_type: VotableType, votable_id: UUID, requester_id: UserId
    ) -> VotableContent:
        """Remove the featured mark from a reply or comment."""
        return await self._set_featured(votable_type, votable_id, requester_id, False)

    async def _set_featured(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        requester_id: UserId,
        is_featured: bool,
    ) -> VotableContent:
        with logfire.span(
            "moderation_service.set_featured",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            is_featured=is_featured,
        ):
            requester = await self.user_service.get_by_id(requester_id)
            self._require_moderator(requester)
            content = await self.content_service.get_content(votable_type, votable_id)

            repository = self.content_service.repository_for(votable_type)
            updated = await repository.set_featured(votable_id, is_featured)
            logfire.info(
                "Content featured" if is_featured else "Content unfeatured",
                votable_id=str(votable_id),
                requester_id=str(requester_id),
            )
            return updated or content

    async def delete(
        self, votable_type: VotableType, votable_id: UUID, requester_id: UserId
    ) -> VotableContent:
        """Soft delete a reply or comment.

        Deleted items keep their counters but refuse new votes. Deleting
        twice is a no-op.

        Raises:
            NotFoundError: If requester or target not found
            AuthorizationError: If requester is neither author nor moderator
        """
        with logfire.span(
            "moderation_service.delete",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            requester_id=str(requester_id),
        ):
            requester = await self.user_service.get_by_id(requester_id)
            content = await self.content_service.get_content(votable_type, votable_id)

            if not content.can_be_deleted_by(requester, self._threshold):
                logfire.warn(
                    "Unauthorized delete attempt",
                    votable_id=str(votable_id),
                    requester_id=str(requester_id),
                )
                raise AuthorizationError(
                    f"Only the author or a moderator can delete this {describe(votable_type)}"
                )

            if content.is_deleted:
                return content

            repository = self.content_service.repository_for(votable_type)
            updated = await repository.soft_delete(votable_id, utcnow())
            logfire.info("Content deleted", votable_id=str(votable_id))
            return updated or content

    def _require_moderator(self, user: User) -> None:
        if not user.can_moderate(self._threshold):
            logfire.warn("Moderation attempt without capability", user_id=str(user.id))
            raise AuthorizationError("Moderator role required")
