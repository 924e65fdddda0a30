"""Vote state machine keeping votes, counters and karma in lockstep.

Each (voter, target) pair is in one of three states: no vote, upvoted or
downvoted. A request names the desired state (1, -1, or 0 to retract) and the
service commits the vote row, the target's counters and the author's karma as
one unit of work. Requests that would not change anything write nothing and
return the current counters.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from forum_karma.core.errors import ForbiddenError, NotFoundError
from forum_karma.db.unit_of_work import run_in_unit_of_work
from forum_karma.domain.counters import (
    RETRACT,
    CounterDelta,
    compute_counter_delta,
    validate_vote_value,
)
from forum_karma.domain.targets import Target
from forum_karma.models import Vote
from forum_karma.repositories import (
    ContentRef,
    ContentRepository,
    Counters,
    UserRepository,
    VoteRepository,
)
from forum_karma.services.ledger import apply_karma
from forum_karma.services.notifications import (
    DatabaseNotificationPublisher,
    NotificationPublisher,
    UpvoteEvent,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VoteOutcome:
    """Authoritative state of a (voter, target) pair after an operation."""

    value: int
    upvotes: int
    downvotes: int
    score: int


@dataclass(frozen=True)
class Transition:
    """Result of applying one vote transition inside a unit of work."""

    requested: int
    counter_delta: CounterDelta
    counters: Counters

    def outcome(self) -> VoteOutcome:
        return VoteOutcome(
            value=self.requested,
            upvotes=self.counters.upvotes,
            downvotes=self.counters.downvotes,
            score=self.counters.score,
        )


def apply_transition(
    session: Session,
    content: ContentRef,
    voter_id: int,
    existing: Vote | None,
    requested: int,
) -> Transition:
    """Move ``voter_id``'s vote on ``content`` to ``requested``.

    ``existing`` is the voter's current vote row, read under lock in the same
    unit of work. The vote row, counters and karma are written through the
    session; committing is the caller's job.
    """
    previous = existing.value if existing is not None else RETRACT
    delta = compute_counter_delta(previous, requested)
    contents = ContentRepository(session)

    if delta.is_noop:
        return Transition(requested, delta, contents.read_counters(content.target))

    votes = VoteRepository(session)
    if requested == RETRACT:
        if existing is not None:
            votes.delete(existing)
    else:
        votes.upsert(voter_id, content.target, requested, existing=existing)

    contents.apply_delta(content.target, delta)
    karma_delta = apply_karma(UserRepository(session), content, voter_id, delta.score)
    counters = contents.read_counters(content.target)

    logger.debug(
        "Vote %s -> %s by user %s on %s %s (delta %s, karma %s %+d)",
        previous,
        requested,
        voter_id,
        content.target.kind.value,
        content.target.id,
        delta,
        karma_delta.bucket,
        karma_delta.amount,
    )
    return Transition(requested, delta, counters)


class VotingService:
    """Entry point for casting, reading and withdrawing votes."""

    def __init__(
        self,
        notifier: NotificationPublisher | None = None,
        *,
        max_retries: int | None = None,
    ) -> None:
        self.notifier = notifier if notifier is not None else DatabaseNotificationPublisher()
        self.max_retries = max_retries

    def cast_vote(self, session: Session, target: Target, voter_id: int, value: int) -> VoteOutcome:
        """Set ``voter_id``'s vote on ``target`` to ``value`` (1, -1 or 0 to retract).

        Returns:
            The requested value and the target's counters after the commit.

        Raises:
            InvalidArgumentError: If ``value`` is not -1, 0 or 1.
            NotFoundError: If the target does not exist or was deleted.
            ForbiddenError: If the voter authored the target or it is locked.
            ConflictError: If every retry hit transaction contention.
            InternalError: If the store failed.
        """
        requested = validate_vote_value(value)

        def work(db: Session) -> tuple[ContentRef, Transition]:
            content = ContentRepository(db).lookup(target)
            if content is None or content.deleted:
                raise NotFoundError(f"{target.kind.value.capitalize()} not found")

            if requested != RETRACT:
                if content.author_id == voter_id:
                    raise ForbiddenError("Cannot vote on own content")
                if content.is_locked:
                    raise ForbiddenError(f"{target.kind.value.capitalize()} is locked")

            existing = VoteRepository(db).get(voter_id, target, for_update=True)
            return content, apply_transition(db, content, voter_id, existing, requested)

        content, transition = run_in_unit_of_work(
            session,
            work,
            retries=self.max_retries,
            label=f"cast vote on {target.kind.value} {target.id}",
        )

        if transition.counter_delta.up == 1 and content.author_id != voter_id:
            try:
                self.notifier.publish_upvote(
                    session,
                    UpvoteEvent(recipient_id=content.author_id, sender_id=voter_id, target=target),
                )
            except Exception:
                logger.error(
                    "Upvote notification for %s %s failed after commit",
                    target.kind.value,
                    target.id,
                    exc_info=True,
                )

        return transition.outcome()

    def retract_own_vote(self, session: Session, vote_id: int, voter_id: int) -> VoteOutcome:
        """Withdraw a vote by id on behalf of the user who cast it.

        Raises:
            NotFoundError: If the vote no longer exists.
            ForbiddenError: If the vote belongs to someone else.
        """

        def work(db: Session) -> Transition:
            vote = VoteRepository(db).get_by_id(vote_id, for_update=True)
            if vote is None:
                raise NotFoundError("Vote not found")
            if vote.voter_id != voter_id:
                raise ForbiddenError("Cannot remove another user's vote")
            content = ContentRepository(db).lookup(vote.target)
            if content is None:
                raise NotFoundError(f"{vote.target.kind.value.capitalize()} not found")
            return apply_transition(db, content, voter_id, vote, RETRACT)

        transition = run_in_unit_of_work(
            session,
            work,
            retries=self.max_retries,
            label=f"retract vote {vote_id}",
        )
        return transition.outcome()

    @staticmethod
    def get_my_vote(session: Session, target: Target, voter_id: int) -> int:
        """Return the voter's current value on ``target`` (0 when absent).

        Raises:
            NotFoundError: If the target does not exist or was deleted.
        """
        content = ContentRepository(session).lookup(target)
        if content is None or content.deleted:
            raise NotFoundError(f"{target.kind.value.capitalize()} not found")
        return VoteRepository(session).get_value(voter_id, target)
