"""Models recording moderator actions."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_karma.db.session import Base
from forum_karma.db.time import utcnow

MODLOG_ACTION_VOTE_RETRACT = "vote_retract"
MODLOG_REASON_MAX_LENGTH = 500


class ModerationLogEntry(Base):
    """Audit record of an administrative action such as a vote retraction."""

    __tablename__ = "moderation_log"
    __table_args__ = (
        CheckConstraint("target_type IN ('post', 'comment')", name="ck_modlog_target_type"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    moderator_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    action: Mapped[str] = mapped_column(String(32), nullable=False)
    target_type: Mapped[str] = mapped_column(String(16), nullable=False)
    target_id: Mapped[int] = mapped_column(Integer, nullable=False)
    # Voter whose vote was removed.
    target_user_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reason: Mapped[str | None] = mapped_column(String(MODLOG_REASON_MAX_LENGTH), nullable=True)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
