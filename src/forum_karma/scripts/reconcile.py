"""Recompute karma or counters from the vote table to repair drift.

Usage examples:
    forum-karma-reconcile --user 42
    forum-karma-reconcile --all-users
    forum-karma-reconcile --post 7 --comment 19
"""
from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from sqlalchemy.orm import Session, sessionmaker

from forum_karma.core.errors import VoteError
from forum_karma.core.settings import settings
from forum_karma.db.session import SessionLocal
from forum_karma.domain.targets import CommentTarget, PostTarget, Target
from forum_karma.services.reconciliation import ReconciliationService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Recompute karma or counters from the vote table to repair drift."
    )
    parser.add_argument("--user", type=int, action="append", default=[], help="user id to reconcile")
    parser.add_argument("--all-users", action="store_true", help="reconcile every user's karma")
    parser.add_argument("--post", type=int, action="append", default=[], help="post id to recount")
    parser.add_argument(
        "--comment", type=int, action="append", default=[], help="comment id to recount"
    )
    return parser


def run(args: argparse.Namespace, session: Session, service: ReconciliationService) -> int:
    """Execute the requested reconciliations; return the number of failures."""
    failures = 0
    if args.all_users:
        try:
            report = service.recompute_all_users(session)
        except VoteError as err:
            failures += 1
            logger.error("Could not list users to reconcile: %s", err.message)
            print(f"all users: {err.message}", file=sys.stderr)
        else:
            print(f"Reconciled karma for {report.reconciled} users")
            for user_id, message in report.failed.items():
                failures += 1
                print(f"user {user_id}: {message}", file=sys.stderr)

    for user_id in args.user:
        try:
            karma = service.recompute_user_karma(session, user_id)
        except VoteError as err:
            failures += 1
            logger.error("Reconciliation failed for user %s: %s", user_id, err.message)
            print(f"user {user_id}: {err.message}", file=sys.stderr)
            continue
        print(f"user {user_id}: post={karma.post} comment={karma.comment} total={karma.total}")

    targets: list[Target] = [PostTarget(pid) for pid in args.post]
    targets += [CommentTarget(cid) for cid in args.comment]
    for target in targets:
        try:
            counters = service.recompute_content_counters(session, target)
        except VoteError as err:
            failures += 1
            print(f"{target.kind.value} {target.id}: {err.message}", file=sys.stderr)
            continue
        print(
            f"{target.kind.value} {target.id}: "
            f"up={counters.upvotes} down={counters.downvotes} score={counters.score}"
        )
    return failures


def main(
    argv: Sequence[str] | None = None,
    session_factory: sessionmaker[Session] | None = None,
) -> int:
    """CLI entry point."""
    logging.basicConfig(level=settings.log_level.upper())
    parser = build_parser()
    args = parser.parse_args(argv)
    if not (args.all_users or args.user or args.post or args.comment):
        parser.error("nothing to reconcile; pass --user, --all-users, --post or --comment")

    factory = session_factory or SessionLocal
    with factory() as session:
        failures = run(args, session, ReconciliationService())
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
