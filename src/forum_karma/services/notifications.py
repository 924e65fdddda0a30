"""Upvote notifications for content authors.

Notifications are a best-effort side effect: they are written after the vote
transaction has committed, and a delivery failure is logged without touching
the vote that triggered it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.orm import Session

from forum_karma.core.settings import settings
from forum_karma.domain.targets import Target, TargetKind
from forum_karma.models import Notification
from forum_karma.models.notification import (
    NOTIFICATION_COMMENT_UPVOTE,
    NOTIFICATION_POST_UPVOTE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UpvoteEvent:
    """A non-author moved a vote on ``target`` into the upvoted state."""

    recipient_id: int
    sender_id: int
    target: Target


class NotificationPublisher(Protocol):
    """Collaborator receiving upvote events."""

    def publish_upvote(self, session: Session, event: UpvoteEvent) -> None:
        """Deliver ``event``; must not raise."""


class DatabaseNotificationPublisher:
    """Stores upvote events as rows in the ``notification`` table."""

    def publish_upvote(self, session: Session, event: UpvoteEvent) -> None:
        if not settings.notifications_enabled:
            return

        is_post = event.target.kind is TargetKind.POST
        notification = Notification(
            recipient_id=event.recipient_id,
            sender_id=event.sender_id,
            type=NOTIFICATION_POST_UPVOTE if is_post else NOTIFICATION_COMMENT_UPVOTE,
            title="Your post was upvoted" if is_post else "Your comment was upvoted",
            related_post_id=event.target.id if is_post else None,
            related_comment_id=None if is_post else event.target.id,
        )
        try:
            session.add(notification)
            session.commit()
        except Exception:
            session.rollback()
            logger.error(
                "Failed to store upvote notification for user %s on %s %s",
                event.recipient_id,
                event.target.kind.value,
                event.target.id,
                exc_info=True,
            )
