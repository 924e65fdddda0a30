"""Karma ledger storage on user accounts."""
from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from forum_karma.domain.karma import KarmaDelta
from forum_karma.models import User

__all__ = ["KarmaBreakdown", "UserRepository"]


@dataclass(frozen=True)
class KarmaBreakdown:
    """Per-bucket karma for one user."""

    post: int
    comment: int
    awardee: int
    awarder: int

    @property
    def total(self) -> int:
        """Return the sum of every bucket."""
        return self.post + self.comment + self.awardee + self.awarder


class UserRepository:
    """Reads and writes the karma columns of ``user_account``."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def exists(self, user_id: int) -> bool:
        """Return True if the user exists."""
        stmt = select(User.id).where(User.id == user_id)
        return self.session.execute(stmt).first() is not None

    def read_karma(self, user_id: int) -> KarmaBreakdown | None:
        """Return the stored karma buckets, or ``None`` if the user is unknown."""
        row = self.session.execute(
            select(
                User.karma_post,
                User.karma_comment,
                User.karma_awardee,
                User.karma_awarder,
            ).where(User.id == user_id)
        ).first()
        if row is None:
            return None
        return KarmaBreakdown(
            post=row.karma_post,
            comment=row.karma_comment,
            awardee=row.karma_awardee,
            awarder=row.karma_awarder,
        )

    def apply_karma_delta(self, user_id: int, delta: KarmaDelta) -> None:
        """Add ``delta.amount`` to one karma bucket in a single UPDATE statement."""
        if delta.amount == 0:
            return
        column = getattr(User, delta.bucket)
        self.session.execute(
            update(User).where(User.id == user_id).values({column: column + delta.amount})
        )

    def replace_vote_karma(self, user_id: int, *, post: int, comment: int) -> None:
        """Overwrite the vote-derived karma buckets."""
        self.session.execute(
            update(User).where(User.id == user_id).values(karma_post=post, karma_comment=comment)
        )
