"""Administrative reversal of individual votes.

Moderators remove a vote by id. The removal runs through the same transition
primitive as an ordinary retract, so counters and karma move exactly as if
the voter had withdrawn the vote themselves, and a moderation-log entry is
written once the unit of work has committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from forum_karma.core.errors import InvalidArgumentError, NotFoundError
from forum_karma.db.unit_of_work import run_in_unit_of_work
from forum_karma.domain.counters import RETRACT
from forum_karma.domain.targets import Target
from forum_karma.models.moderation import MODLOG_REASON_MAX_LENGTH
from forum_karma.repositories import ContentRepository, Counters, UserRepository, VoteRepository
from forum_karma.services.moderation_log import (
    DatabaseModerationLog,
    ModerationLog,
    RetractionRecord,
)
from forum_karma.services.voting import apply_transition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetractionResult:
    """What an administrative retraction removed and where counters ended up."""

    vote_id: int
    voter_id: int
    target: Target
    removed_value: int
    counters: Counters


class AdminRetractionService:
    """Removes votes on behalf of moderators."""

    def __init__(
        self,
        moderation_log: ModerationLog | None = None,
        *,
        max_retries: int | None = None,
    ) -> None:
        self.moderation_log = (
            moderation_log if moderation_log is not None else DatabaseModerationLog()
        )
        self.max_retries = max_retries

    def retract(
        self,
        session: Session,
        vote_id: int,
        acting_admin_id: int,
        reason: str,
    ) -> RetractionResult:
        """Reverse vote ``vote_id`` and record the action in the moderation log.

        Raises:
            InvalidArgumentError: If ``reason`` is longer than the log allows.
            NotFoundError: If the vote (or the acting admin) does not exist.
                Callers that tolerate double retraction may ignore it.
        """
        if len(reason) > MODLOG_REASON_MAX_LENGTH:
            raise InvalidArgumentError(
                f"Reason cannot exceed {MODLOG_REASON_MAX_LENGTH} characters"
            )

        def work(db: Session) -> RetractionResult:
            if not UserRepository(db).exists(acting_admin_id):
                raise NotFoundError("Acting admin not found")
            vote = VoteRepository(db).get_by_id(vote_id, for_update=True)
            if vote is None:
                raise NotFoundError("Vote not found")
            voter_id, target, removed_value = vote.voter_id, vote.target, vote.value

            # Deleted content still carries counters and karma that must be reversed.
            content = ContentRepository(db).lookup(target)
            if content is None:
                raise NotFoundError(f"{target.kind.value.capitalize()} not found")

            transition = apply_transition(db, content, voter_id, vote, RETRACT)
            return RetractionResult(
                vote_id=vote_id,
                voter_id=voter_id,
                target=target,
                removed_value=removed_value,
                counters=transition.counters,
            )

        result = run_in_unit_of_work(
            session,
            work,
            retries=self.max_retries,
            label=f"admin retraction of vote {vote_id}",
        )

        logger.info(
            "Admin %s retracted vote %s (%+d) on %s %s",
            acting_admin_id,
            vote_id,
            result.removed_value,
            result.target.kind.value,
            result.target.id,
        )
        try:
            self.moderation_log.record_retraction(
                session,
                RetractionRecord(
                    moderator_id=acting_admin_id,
                    voter_id=result.voter_id,
                    target=result.target,
                    removed_value=result.removed_value,
                    reason=reason,
                ),
            )
        except Exception:
            logger.error(
                "Moderation log entry for retraction of vote %s failed after commit",
                vote_id,
                exc_info=True,
            )
        return result
