"""Moderation-log collaborator for administrative vote retractions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from forum_karma.domain.targets import Target
from forum_karma.models import ModerationLogEntry
from forum_karma.models.moderation import MODLOG_ACTION_VOTE_RETRACT

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetractionRecord:
    """Facts about a vote an administrator removed."""

    moderator_id: int
    voter_id: int
    target: Target
    removed_value: int
    reason: str


class ModerationLog(Protocol):
    """Collaborator receiving moderation-log entries."""

    def record_retraction(self, session: Session, record: RetractionRecord) -> None:
        """Persist ``record``; must not raise."""


class DatabaseModerationLog:
    """Writes retraction entries to the ``moderation_log`` table."""

    def record_retraction(self, session: Session, record: RetractionRecord) -> None:
        entry = ModerationLogEntry(
            moderator_id=record.moderator_id,
            action=MODLOG_ACTION_VOTE_RETRACT,
            target_type=record.target.kind.value,
            target_id=record.target.id,
            target_user_id=record.voter_id,
            reason=record.reason,
            details=f"Removed vote of {record.removed_value:+d}",
        )
        try:
            session.add(entry)
            session.commit()
        except Exception:
            session.rollback()
            logger.error(
                "Failed to write moderation log for vote retraction on %s %s by %s",
                record.target.kind.value,
                record.target.id,
                record.moderator_id,
                exc_info=True,
            )
