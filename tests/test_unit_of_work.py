"""Tests for the atomic unit of work and its retry loop."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from forum_karma.core.errors import ConflictError, InternalError, NotFoundError
from forum_karma.db.unit_of_work import UnitOfWork, run_in_unit_of_work, translate_db_error
from forum_karma.models import Post


def test_translate_db_error() -> None:
    assert isinstance(translate_db_error(IntegrityError("x", {}, Exception())), ConflictError)
    locked = OperationalError("UPDATE post", {}, Exception("database is locked"))
    assert isinstance(translate_db_error(locked), ConflictError)
    assert isinstance(translate_db_error(SQLAlchemyError("boom")), InternalError)


def test_commits_on_success(db_session, session_factory, test_post) -> None:
    with UnitOfWork(db_session) as session:
        session.get(Post, test_post.id).title = "Renamed"

    with session_factory() as fresh:
        assert fresh.get(Post, test_post.id).title == "Renamed"


def test_rolls_back_on_error(db_session, session_factory, test_post) -> None:
    with pytest.raises(NotFoundError):
        with UnitOfWork(db_session) as session:
            session.get(Post, test_post.id).title = "Renamed"
            session.flush()
            raise NotFoundError("gone")

    with session_factory() as fresh:
        assert fresh.get(Post, test_post.id).title == "Test post"


def test_retries_conflicts_until_success(db_session) -> None:
    calls: list[int] = []

    def work(session):
        calls.append(1)
        if len(calls) == 1:
            raise IntegrityError("INSERT INTO vote", {}, Exception("duplicate"))
        return session.execute(select(1)).scalar_one()

    assert run_in_unit_of_work(db_session, work, retries=3) == 1
    assert len(calls) == 2


def test_surfaces_conflict_after_last_retry(db_session) -> None:
    calls: list[int] = []

    def work(session):
        calls.append(1)
        raise OperationalError("UPDATE post", {}, Exception("database is locked"))

    with pytest.raises(ConflictError):
        run_in_unit_of_work(db_session, work, retries=2)
    assert len(calls) == 2


def test_internal_errors_are_not_retried(db_session) -> None:
    calls: list[int] = []

    def work(session):
        calls.append(1)
        raise SQLAlchemyError("disk full")

    with pytest.raises(InternalError):
        run_in_unit_of_work(db_session, work, retries=3)
    assert len(calls) == 1


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.mark.parametrize("sqlstate", ["40001", "40P01"])
def test_serialization_failures_are_conflicts(sqlstate) -> None:
    err = OperationalError("UPDATE vote", {}, _DriverError("could not serialize access", sqlstate))
    assert isinstance(translate_db_error(err), ConflictError)


def test_other_operational_errors_are_internal() -> None:
    lost = OperationalError("SELECT 1", {}, Exception("server closed the connection unexpectedly"))
    assert isinstance(translate_db_error(lost), InternalError)

    auth = OperationalError("SELECT 1", {}, _DriverError("password authentication failed", "28P01"))
    assert isinstance(translate_db_error(auth), InternalError)


def test_lost_connection_is_not_retried(db_session) -> None:
    calls: list[int] = []

    def work(session):
        calls.append(1)
        raise OperationalError("SELECT 1", {}, Exception("unable to open database file"))

    with pytest.raises(InternalError):
        run_in_unit_of_work(db_session, work, retries=3)
    assert len(calls) == 1


def test_rejects_zero_retries(db_session) -> None:
    calls: list[int] = []
    with pytest.raises(ValueError):
        run_in_unit_of_work(db_session, lambda session: calls.append(1), retries=0)
    assert calls == []
