"""SQLAlchemy models for user accounts and their karma buckets."""

from __future__ import annotations

from sqlalchemy import Boolean, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from forum_karma.db.session import Base


class User(Base):
    """Forum account carrying the denormalized karma ledger.

    ``karma_post`` and ``karma_comment`` are projections of the vote table and
    are only written by the voting engine or by reconciliation. The award
    buckets belong to the awards subsystem and are passed through untouched.
    """

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    karma_post: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    karma_comment: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    karma_awardee: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    karma_awarder: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def total_karma(self) -> int:
        """Return the sum of every karma bucket."""
        return self.karma_post + self.karma_comment + self.karma_awardee + self.karma_awarder
