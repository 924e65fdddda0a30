"""Atomic unit-of-work boundary used by every vote mutation.

A vote cast, an owner retraction and an admin retraction each write three
records (vote row, content counters, author karma). They are only ever
written inside a :class:`UnitOfWork`, which commits all of them together or
rolls all of them back and reports the failure as a taxonomy error.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import TypeVar

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from forum_karma.core.errors import ConflictError, InternalError, VoteError
from forum_karma.core.settings import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# serialization_failure, deadlock_detected, lock_not_available
_CONTENTION_SQLSTATES = frozenset({"40001", "40P01", "55P03"})
_CONTENTION_MARKERS = ("database is locked", "database table is locked", "deadlock")


def is_contention(err: OperationalError) -> bool:
    """Return True if ``err`` is a lock timeout, deadlock or serialization failure."""
    sqlstate = getattr(err.orig, "sqlstate", None) or getattr(err.orig, "pgcode", None)
    if sqlstate in _CONTENTION_SQLSTATES:
        return True
    message = str(err.orig).lower()
    return any(marker in message for marker in _CONTENTION_MARKERS)


def translate_db_error(err: SQLAlchemyError) -> VoteError:
    """Map a SQLAlchemy failure onto the engine's error taxonomy."""
    if isinstance(err, IntegrityError) or (
        isinstance(err, OperationalError) and is_contention(err)
    ):
        return ConflictError(f"Concurrent update detected: {err.__class__.__name__}")
    return InternalError(f"Storage failure: {err.__class__.__name__}")


class UnitOfWork:
    """Context manager committing a session transaction as one all-or-nothing unit."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def __enter__(self) -> Session:
        return self.session

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> bool:
        if exc_type is None:
            try:
                self.session.commit()
            except SQLAlchemyError as err:
                self.session.rollback()
                raise translate_db_error(err) from err
            return False

        self.session.rollback()
        if isinstance(exc, SQLAlchemyError):
            raise translate_db_error(exc) from exc
        return False


def run_in_unit_of_work(
    session: Session,
    work: Callable[[Session], T],
    *,
    retries: int | None = None,
    label: str = "unit of work",
) -> T:
    """Run ``work`` inside a fresh unit of work, retrying on ``ConflictError``.

    ``work`` must re-read every piece of state it depends on, since each
    attempt starts from a rolled-back session.

    Raises:
        ValueError: If ``retries`` is less than 1.
        ConflictError: If every attempt ended in contention.
    """
    attempts = retries if retries is not None else settings.vote_max_retries
    if attempts < 1:
        raise ValueError(f"retries must be at least 1, got {attempts}")

    attempt = 1
    while True:
        try:
            with UnitOfWork(session):
                return work(session)
        except ConflictError as err:
            logger.warning("%s conflicted (attempt %d/%d): %s", label, attempt, attempts, err)
            if attempt >= attempts:
                raise
            attempt += 1
