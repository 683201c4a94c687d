"""Poll domain service.

Owns the poll lifecycle (create, vote, close, expire) and result
computation. The vote ledger's unique key is the only guard against
double votes; the existence check done before inserting just avoids a
round trip in the common case.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import uuid4

import logfire
from sqlalchemy.exc import IntegrityError

from radar.config import ModerationSettings, PollSettings
from radar.domain.error import (
    AuthorizationError,
    DuplicateVoteError,
    InvalidOptionError,
    NotFoundError,
    PollClosedError,
    ValidationError,
)
from radar.domain.model import Poll, PollOption, PollVote
from radar.domain.model.common import as_utc, utcnow
from radar.domain.repository import (
    PlayerRepository,
    PollRepository,
    PollVoteRepository,
    ThreadRepository,
)
from radar.domain.value import (
    AnonymousIdentity,
    Identity,
    PlayerId,
    PollId,
    PollOptionId,
    PollType,
    PollVoteId,
    RegisteredIdentity,
    ThreadId,
    UserId,
)

from .base import Service, violates_constraint
from .user_service import UserService


@dataclass
class OptionResult:
    """Tally for one option, computed on read."""

    option: PollOption
    count: int
    percentage: float
    is_winning: bool


@dataclass
class PollResults:
    """Poll with a tally per option, in display order."""

    poll: Poll
    total_votes: int
    options: list[OptionResult]


def calculate_percentage(count: int, total: int) -> float:
    """Share of ``total`` as a percentage, 0.0 when nobody has voted."""
    if total <= 0:
        return 0.0
    return count / total * 100


def pick_winner(options: Sequence[PollOption]) -> Optional[PollOption]:
    """Option with the most votes; ties go to the lowest display order."""
    winner: Optional[PollOption] = None
    for option in sorted(options, key=lambda o: o.display_order):
        if option.vote_count > 0 and (
            winner is None or option.vote_count > winner.vote_count
        ):
            winner = option
    return winner


class PollService(Service):
    """Domain service for poll operations."""

    def __init__(
        self,
        poll_repository: PollRepository,
        poll_vote_repository: PollVoteRepository,
        thread_repository: ThreadRepository,
        player_repository: PlayerRepository,
        user_service: UserService,
        poll_settings: PollSettings,
        moderation_settings: ModerationSettings,
    ) -> None:
        """Initialize poll service.

        Args:
            poll_repository: Poll repository
            poll_vote_repository: Poll vote ledger
            thread_repository: Thread lookup for poll associations
            player_repository: Player lookup for poll associations
            user_service: User domain service
            poll_settings: Poll creation limits
            moderation_settings: Moderation capability rules
        """
        self.poll_repository = poll_repository
        self.poll_vote_repository = poll_vote_repository
        self.thread_repository = thread_repository
        self.player_repository = player_repository
        self.user_service = user_service
        self.poll_settings = poll_settings
        self.moderation_settings = moderation_settings

    async def create_poll(
        self,
        author_id: UserId,
        question: str,
        option_texts: Sequence[str],
        description: Optional[str] = None,
        poll_type: PollType = PollType.SINGLE_CHOICE,
        thread_id: Optional[ThreadId] = None,
        player_id: Optional[PlayerId] = None,
        expires_at: Optional[datetime] = None,
        is_anonymous: bool = False,
    ) -> Poll:
        """Create a poll with its options.

        Options keep the order they were given in.

        Args:
            author_id: Author user ID
            question: Poll question
            option_texts: Option labels, in display order
            description: Optional longer description
            poll_type: Single choice, multiple choice or yes/no
            thread_id: Optional discussion thread the poll belongs to
            player_id: Optional player the poll is about
            expires_at: Optional time after which votes are refused
            is_anonymous: Whether voter user IDs are withheld from the ledger

        Returns:
            Created poll

        Raises:
            ValidationError: If question, options or expiry are invalid
            NotFoundError: If author, thread or player does not exist
        """
        with logfire.span(
            "poll_service.create_poll",
            author_id=str(author_id),
            option_count=len(option_texts),
        ):
            question = question.strip()
            options = [text.strip() for text in option_texts]
            self._validate_poll(question, options, poll_type, expires_at)

            await self.user_service.get_by_id(author_id)
            if thread_id and not await self.thread_repository.find_by_id(thread_id):
                raise NotFoundError("Thread", str(thread_id))
            if player_id and not await self.player_repository.find_by_id(player_id):
                raise NotFoundError("Player", str(player_id))

            now = utcnow()
            poll = Poll(
                id=PollId(uuid4()),
                author_id=author_id,
                question=question,
                description=description.strip() if description else None,
                poll_type=poll_type,
                thread_id=thread_id,
                player_id=player_id,
                is_anonymous=is_anonymous,
                is_active=True,
                expires_at=expires_at,
                total_votes=0,
                created_at=now,
                updated_at=now,
            )
            poll_options = [
                PollOption(
                    id=PollOptionId(uuid4()),
                    poll_id=poll.id,
                    option_text=text,
                    vote_count=0,
                    display_order=index,
                    created_at=now,
                )
                for index, text in enumerate(options)
            ]

            created = await self.poll_repository.create(poll, poll_options)
            logfire.info(
                "Poll created",
                poll_id=str(created.id),
                author_id=str(author_id),
                poll_type=poll_type.value,
            )
            return created

    def _validate_poll(
        self,
        question: str,
        options: List[str],
        poll_type: PollType,
        expires_at: Optional[datetime],
    ) -> None:
        settings = self.poll_settings

        if not question:
            raise ValidationError("Poll question is required")
        if len(question) > settings.max_question_length:
            raise ValidationError(
                f"Poll question must be at most {settings.max_question_length} characters"
            )
        if len(options) < settings.min_options:
            raise ValidationError(
                f"Poll must have at least {settings.min_options} options"
            )
        if len(options) > settings.max_options:
            raise ValidationError(
                f"Poll cannot have more than {settings.max_options} options"
            )
        if any(not text for text in options):
            raise ValidationError("Poll options cannot be blank")
        if any(len(text) > settings.max_option_length for text in options):
            raise ValidationError(
                f"Poll options must be at most {settings.max_option_length} characters"
            )
        if poll_type == PollType.YES_NO and len(options) != 2:
            raise ValidationError("Yes/no polls must have exactly 2 options")
        if expires_at is not None and as_utc(expires_at) <= utcnow():
            raise ValidationError("Poll expiry must be in the future")

    async def get_poll(self, poll_id: PollId) -> Poll:
        """Get poll by ID.

        Raises:
            NotFoundError: If poll not found
        """
        poll = await self.poll_repository.find_by_id(poll_id)
        if not poll:
            logfire.warn("Poll not found", poll_id=str(poll_id))
            raise NotFoundError("Poll", str(poll_id))
        return poll

    async def get_options(self, poll_id: PollId) -> List[PollOption]:
        """Get a poll's options in display order."""
        return await self.poll_repository.find_options(poll_id)

    async def vote(
        self, poll_id: PollId, option_id: PollOptionId, identity: Identity
    ) -> PollVote:
        """Cast a vote on a poll option.

        The ledger row and both counters are written by one repository
        call, inside the caller's transaction.

        Args:
            poll_id: Poll ID
            option_id: Chosen option ID
            identity: Registered user or anonymous visitor

        Returns:
            Recorded vote

        Raises:
            NotFoundError: If poll, option or the registered voter not found
            PollClosedError: If poll is closed or expired
            InvalidOptionError: If the option belongs to another poll
            DuplicateVoteError: If this identity already voted on the poll
        """
        with logfire.span(
            "poll_service.vote",
            poll_id=str(poll_id),
            option_id=str(option_id),
            identity_kind=identity.kind,
        ):
            poll = await self.get_poll(poll_id)
            if isinstance(identity, RegisteredIdentity):
                await self.user_service.get_by_id(identity.user_id)

            if not poll.accepts_votes():
                logfire.warn(
                    "Vote on closed poll",
                    poll_id=str(poll_id),
                    is_active=poll.is_active,
                    expired=poll.is_expired(),
                )
                raise PollClosedError(str(poll_id))

            option = await self.poll_repository.find_option_by_id(option_id)
            if not option:
                logfire.warn("Vote on non-existent option", option_id=str(option_id))
                raise NotFoundError("Poll option", str(option_id))
            if option.poll_id != poll.id:
                logfire.warn(
                    "Vote with option from another poll",
                    poll_id=str(poll_id),
                    option_id=str(option_id),
                )
                raise InvalidOptionError(str(option_id), str(poll_id))

            # Fast path only; the unique key decides under a race
            if await self.poll_vote_repository.exists(poll.id, identity.voter_key):
                logfire.info("Duplicate poll vote attempt", poll_id=str(poll_id))
                raise DuplicateVoteError("poll", str(poll_id))

            vote = self._build_vote(poll, option, identity)

            try:
                saved_vote = await self.poll_vote_repository.record_vote(vote)
            except IntegrityError as e:
                if not violates_constraint(e, "unique_poll_vote"):
                    raise
                logfire.warn("Duplicate poll vote race", poll_id=str(poll_id))
                raise DuplicateVoteError("poll", str(poll_id))

            logfire.info(
                "Poll vote recorded",
                poll_id=str(poll_id),
                option_id=str(option_id),
                anonymous=saved_vote.is_anonymous,
            )
            return saved_vote

    @staticmethod
    def _build_vote(poll: Poll, option: PollOption, identity: Identity) -> PollVote:
        user_id: Optional[UserId] = None
        ip_address: Optional[str] = None
        user_agent: Optional[str] = None

        if isinstance(identity, RegisteredIdentity):
            # Anonymous polls keep only the dedup key, not who voted
            if not poll.is_anonymous:
                user_id = identity.user_id
        elif isinstance(identity, AnonymousIdentity):
            ip_address = identity.ip_address
            user_agent = identity.user_agent

        return PollVote(
            id=PollVoteId(uuid4()),
            poll_id=poll.id,
            option_id=option.id,
            voter_key=identity.voter_key,
            user_id=user_id,
            ip_address=ip_address,
            user_agent=user_agent,
            is_anonymous=poll.is_anonymous or isinstance(identity, AnonymousIdentity),
            created_at=utcnow(),
        )

    async def has_voted(self, poll_id: PollId, identity: Identity) -> bool:
        """Check whether an identity already voted on a poll."""
        return await self.poll_vote_repository.exists(poll_id, identity.voter_key)

    async def get_voted_option_ids(
        self, poll_id: PollId, identity: Identity
    ) -> List[PollOptionId]:
        """Options this identity voted for on a poll (empty if none)."""
        votes = await self.poll_vote_repository.find_by_voter(
            poll_id, identity.voter_key
        )
        return [vote.option_id for vote in votes]

    async def get_results(self, poll_id: PollId) -> PollResults:
        """Compute results from the current counters.

        Args:
            poll_id: Poll ID

        Returns:
            Per-option count and percentage, in display order

        Raises:
            NotFoundError: If poll not found
        """
        with logfire.span("poll_service.get_results", poll_id=str(poll_id)):
            poll = await self.get_poll(poll_id)
            options = await self.poll_repository.find_options(poll_id)
            winner = pick_winner(options)

            return PollResults(
                poll=poll,
                total_votes=poll.total_votes,
                options=[
                    OptionResult(
                        option=option,
                        count=option.vote_count,
                        percentage=calculate_percentage(
                            option.vote_count, poll.total_votes
                        ),
                        is_winning=winner is not None and option.id == winner.id,
                    )
                    for option in options
                ],
            )

    async def get_winning_option(self, poll_id: PollId) -> Optional[PollOption]:
        """Leading option, or None if the poll has no votes yet.

        Raises:
            NotFoundError: If poll not found
        """
        await self.get_poll(poll_id)
        return pick_winner(await self.poll_repository.find_options(poll_id))

    async def close_poll(self, poll_id: PollId, requester_id: UserId) -> Poll:
        """Close a poll to further votes.

        Closing an already closed poll is a no-op.

        Args:
            poll_id: Poll ID
            requester_id: User asking to close it

        Returns:
            The poll after closing

        Raises:
            NotFoundError: If poll or requester not found
            AuthorizationError: If requester is neither author nor moderator
        """
        with logfire.span(
            "poll_service.close_poll",
            poll_id=str(poll_id),
            requester_id=str(requester_id),
        ):
            poll = await self.get_poll(poll_id)
            requester = await self.user_service.get_by_id(requester_id)

            threshold = self.moderation_settings.scout_reputation_threshold
            if not poll.can_be_closed_by(requester, threshold):
                logfire.warn(
                    "Unauthorized poll close attempt",
                    poll_id=str(poll_id),
                    requester_id=str(requester_id),
                )
                raise AuthorizationError("Only the author or a moderator can close this poll")

            if not poll.is_active:
                return poll

            now = utcnow()
            await self.poll_repository.set_active(poll_id, False, now)
            logfire.info("Poll closed", poll_id=str(poll_id))
            return poll.model_copy(update={"is_active": False, "updated_at": now})

    async def expire_polls(self, now: Optional[datetime] = None) -> int:
        """Deactivate every poll past its expiry.

        Voting already treats such polls as closed, so this only tidies
        the active flag for listings.

        Returns:
            Number of polls deactivated
        """
        with logfire.span("poll_service.expire_polls"):
            count = await self.poll_repository.deactivate_expired(now or utcnow())
            if count:
                logfire.info("Expired polls deactivated", count=count)
            return count

    async def list_active(self, limit: int = 20) -> List[Poll]:
        """Polls currently accepting votes, newest first."""
        return await self.poll_repository.find_active(utcnow(), limit)

    async def list_by_player(self, player_id: PlayerId, limit: int = 20) -> List[Poll]:
        """Polls about a player, newest first."""
        return await self.poll_repository.find_by_player(player_id, limit)

    async def list_by_thread(self, thread_id: ThreadId, limit: int = 20) -> List[Poll]:
        """Polls in a thread, newest first."""
        return await self.poll_repository.find_by_thread(thread_id, limit)
