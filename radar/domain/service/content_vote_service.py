"""Reply and player comment voting.

Votes toggle: the same direction twice retracts, the other direction
flips. Each call is one read-modify-write under a lock on the target
row, and ledger and counters are changed together by ``_apply``.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID, uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from radar.domain.error import (
    AuthenticationRequiredError,
    DuplicateVoteError,
    NotFoundError,
    ValidationError,
)
from radar.domain.model import VotableContent, Vote
from radar.domain.model.common import utcnow
from radar.domain.repository import VotableRepository, VoteRepository
from radar.domain.value import (
    Identity,
    RegisteredIdentity,
    UserId,
    VotableType,
    VoteId,
    VoteOutcome,
    VoteType,
)

from .base import Service, violates_constraint
from .content_service import ContentService, describe
from .user_service import UserService


@dataclass
class VoteResult:
    """Outcome of a vote plus the target's counters after it."""

    outcome: VoteOutcome
    upvotes: int
    downvotes: int
    net_score: int
    vote_type: Optional[VoteType]


def counter_delta(
    before: Optional[VoteType], after: Optional[VoteType]
) -> tuple[int, int]:
    """(upvote, downvote) change for moving a user's vote from one state to another."""
    up = 0
    down = 0
    if before == VoteType.UPVOTE:
        up -= 1
    elif before == VoteType.DOWNVOTE:
        down -= 1
    if after == VoteType.UPVOTE:
        up += 1
    elif after == VoteType.DOWNVOTE:
        down += 1
    return up, down


class ContentVoteService(Service):
    """Domain service for reply and comment votes."""

    def __init__(
        self,
        vote_repository: VoteRepository,
        content_service: ContentService,
        user_service: UserService,
    ) -> None:
        """Initialize content vote service.

        Args:
            vote_repository: Vote ledger for replies and comments
            content_service: Content domain service
            user_service: User domain service
        """
        self.vote_repository = vote_repository
        self.content_service = content_service
        self.user_service = user_service

    async def vote(
        self,
        votable_type: VotableType,
        votable_id: UUID,
        identity: Identity,
        is_upvote: bool,
    ) -> VoteResult:
        """Cast, flip or retract a vote.

        Args:
            votable_type: Reply or player comment
            votable_id: Target ID
            identity: Caller identity (must be registered)
            is_upvote: Requested direction

        Returns:
            What happened and the resulting counters

        Raises:
            AuthenticationRequiredError: If the caller is anonymous
            NotFoundError: If the voter or the target does not exist
            ValidationError: If the target has been deleted
            DuplicateVoteError: If a concurrent insert won the unique key
        """
        label = describe(votable_type)
        with logfire.span(
            "content_vote_service.vote",
            votable_type=votable_type.value,
            votable_id=str(votable_id),
            is_upvote=is_upvote,
        ):
            if not isinstance(identity, RegisteredIdentity):
                logfire.info("Anonymous content vote rejected", votable_id=str(votable_id))
                raise AuthenticationRequiredError(f"Sign in to vote on this {label}")

            user_id = identity.user_id
            await self.user_service.get_by_id(user_id)
            requested = VoteType.from_flag(is_upvote)
            repository = self.content_service.repository_for(votable_type)

            async with repository.locked(votable_id) as target:
                if target is None:
                    logfire.warn("Vote on non-existent content", votable_id=str(votable_id))
                    raise NotFoundError(label.capitalize(), str(votable_id))
                if target.is_deleted:
                    raise ValidationError(f"Cannot vote on a deleted {label}")

                existing = await self.vote_repository.find_by_user_and_votable(
                    user_id, votable_type, votable_id
                )

                if existing is None:
                    outcome, after = VoteOutcome.CAST, requested
                elif existing.vote_type == requested:
                    outcome, after = VoteOutcome.RETRACTED, None
                else:
                    outcome, after = VoteOutcome.TOGGLED, requested

                updated = await self._apply(
                    repository, target, user_id, existing, after
                )

            logfire.info(
                "Content vote applied",
                votable_type=votable_type.value,
                votable_id=str(votable_id),
                user_id=str(user_id),
                outcome=outcome.value,
            )
            return VoteResult(
                outcome=outcome,
                upvotes=updated.upvotes,
                downvotes=updated.downvotes,
                net_score=updated.net_score,
                vote_type=after,
            )

    async def _apply(
        self,
        repository: VotableRepository,
        target: VotableContent,
        user_id: UserId,
        existing: Optional[Vote],
        after: Optional[VoteType],
    ) -> VotableContent:
        """Move the ledger row to ``after`` and adjust counters to match."""
        now = utcnow()
        before = existing.vote_type if existing else None

        if existing is None and after is not None:
            vote = Vote(
                id=VoteId(uuid4()),
                user_id=user_id,
                votable_type=target.votable_type,
                votable_id=target.id,
                vote_type=after,
                created_at=now,
                updated_at=now,
            )
            try:
                await self.vote_repository.save(vote)
            except IntegrityError as e:
                if not violates_constraint(e, "unique_vote"):
                    raise
                logfire.warn(
                    "Duplicate vote attempt",
                    user_id=str(user_id),
                    votable_id=str(target.id),
                )
                raise DuplicateVoteError(describe(target.votable_type), str(target.id))
        elif existing is not None and after is None:
            await self.vote_repository.delete(existing.id)
        elif existing is not None and after is not None:
            await self.vote_repository.update_type(existing.id, after, now)

        up, down = counter_delta(before, after)
        updated = await repository.apply_vote_delta(target.id, up, down)
        return updated or target

    async def get_user_vote(
        self, votable_type: VotableType, votable_id: UUID, user_id: UserId
    ) -> Optional[VoteType]:
        """Direction of a user's current vote on an item, or None."""
        vote = await self.vote_repository.find_by_user_and_votable(
            user_id, votable_type, votable_id
        )
        return vote.vote_type if vote else None
