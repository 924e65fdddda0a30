"""Service layer for the voting engine."""

from .ledger import get_user_karma
from .moderation_log import DatabaseModerationLog, ModerationLog, RetractionRecord
from .notifications import DatabaseNotificationPublisher, NotificationPublisher, UpvoteEvent
from .reconciliation import ReconciliationReport, ReconciliationService
from .retraction import AdminRetractionService, RetractionResult
from .voting import VoteOutcome, VotingService, apply_transition

__all__ = [
    "AdminRetractionService",
    "DatabaseModerationLog",
    "DatabaseNotificationPublisher",
    "ModerationLog",
    "NotificationPublisher",
    "ReconciliationReport",
    "ReconciliationService",
    "RetractionRecord",
    "RetractionResult",
    "UpvoteEvent",
    "VoteOutcome",
    "VotingService",
    "apply_transition",
    "get_user_karma",
]
