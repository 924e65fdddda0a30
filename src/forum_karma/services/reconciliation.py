"""Drift repair for denormalized counters and karma.

Reconciliation recomputes a projection straight from the vote table and
replaces the stored value. Running it twice with no intervening votes gives
the same result, and a run that races a live vote on the same subject is
corrected by the next run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from forum_karma.core.errors import NotFoundError, VoteError
from forum_karma.db.unit_of_work import run_in_unit_of_work
from forum_karma.domain.targets import Target, TargetKind
from forum_karma.models import User
from forum_karma.repositories import (
    ContentRepository,
    Counters,
    KarmaBreakdown,
    UserRepository,
    VoteRepository,
)

logger = logging.getLogger(__name__)


@dataclass
class ReconciliationReport:
    """Outcome of a reconciliation run over every user."""

    reconciled: int = 0
    failed: dict[int, str] = field(default_factory=dict)


class ReconciliationService:
    """Recomputes karma and counters from authoritative vote rows."""

    def __init__(self, *, max_retries: int | None = None) -> None:
        self.max_retries = max_retries

    def recompute_user_karma(self, session: Session, user_id: int) -> KarmaBreakdown:
        """Replace ``user_id``'s post and comment karma with totals summed from votes.

        Deleted content keeps counting: its votes were never reversed.

        Raises:
            NotFoundError: If the user does not exist.
        """

        def work(db: Session) -> KarmaBreakdown:
            users = UserRepository(db)
            if not users.exists(user_id):
                raise NotFoundError("User not found")
            votes = VoteRepository(db)
            post_karma = votes.sum_received(user_id, TargetKind.POST)
            comment_karma = votes.sum_received(user_id, TargetKind.COMMENT)
            users.replace_vote_karma(user_id, post=post_karma, comment=comment_karma)
            karma = users.read_karma(user_id)
            if karma is None:
                raise NotFoundError("User not found")
            return karma

        karma = run_in_unit_of_work(
            session,
            work,
            retries=self.max_retries,
            label=f"karma reconciliation for user {user_id}",
        )
        logger.info(
            "Reconciled karma for user %s: post=%d comment=%d",
            user_id,
            karma.post,
            karma.comment,
        )
        return karma

    def recompute_content_counters(self, session: Session, target: Target) -> Counters:
        """Replace the counters of ``target`` with a fresh tally of its votes.

        Raises:
            NotFoundError: If the content does not exist.
        """

        def work(db: Session) -> Counters:
            contents = ContentRepository(db)
            if contents.lookup(target) is None:
                raise NotFoundError(f"{target.kind.value.capitalize()} not found")
            upvotes, downvotes = VoteRepository(db).tally(target)
            counters = Counters(upvotes=upvotes, downvotes=downvotes, score=upvotes - downvotes)
            contents.replace_counters(target, counters)
            return counters

        counters = run_in_unit_of_work(
            session,
            work,
            retries=self.max_retries,
            label=f"counter reconciliation for {target.kind.value} {target.id}",
        )
        logger.info(
            "Reconciled counters for %s %s: up=%d down=%d score=%d",
            target.kind.value,
            target.id,
            counters.upvotes,
            counters.downvotes,
            counters.score,
        )
        return counters

    def recompute_all_users(self, session: Session) -> ReconciliationReport:
        """Reconcile every user's karma one user per unit of work.

        A user that fails is logged and skipped so the remaining users are
        still reconciled.
        """

        def list_user_ids(db: Session) -> list[int]:
            return list(db.execute(select(User.id).order_by(User.id)).scalars())

        user_ids = run_in_unit_of_work(
            session, list_user_ids, retries=self.max_retries, label="listing users"
        )
        report = ReconciliationReport()
        for user_id in user_ids:
            try:
                self.recompute_user_karma(session, user_id)
            except VoteError as err:
                logger.error("Reconciliation failed for user %s: %s", user_id, err.message)
                report.failed[user_id] = err.message
            else:
                report.reconciled += 1
        return report
