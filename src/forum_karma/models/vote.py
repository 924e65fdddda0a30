"""Models capturing voting interactions on posts and comments."""

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    SmallInteger,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from forum_karma.db.session import Base
from forum_karma.db.time import utcnow
from forum_karma.domain.targets import CommentTarget, PostTarget, Target


class Vote(Base):
    """Authoritative per-(voter, target) vote.

    A retracted vote has no row; a stored value is always 1 or -1. Exactly one
    of ``post_id`` / ``comment_id`` is set, and each voter holds at most one
    row per target.
    """

    __tablename__ = "vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_vote_value"),
        CheckConstraint(
            "(post_id IS NULL) <> (comment_id IS NULL)",
            name="ck_vote_single_target",
        ),
        UniqueConstraint("voter_id", "post_id", name="uq_vote_voter_post"),
        UniqueConstraint("voter_id", "comment_id", name="uq_vote_voter_comment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voter_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    comment_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
    )

    @property
    def target(self) -> Target:
        """Return the voted-on content as a tagged target."""
        if self.post_id is not None:
            return PostTarget(self.post_id)
        if self.comment_id is None:
            raise ValueError(f"Vote {self.id} has no target")
        return CommentTarget(self.comment_id)
