"""Karma ledger application and reads."""

from __future__ import annotations

from sqlalchemy.orm import Session

from forum_karma.core.errors import NotFoundError
from forum_karma.domain.karma import KarmaDelta, compute_karma_delta
from forum_karma.repositories import ContentRef, KarmaBreakdown, UserRepository


def apply_karma(
    users: UserRepository,
    content: ContentRef,
    voter_id: int,
    delta_score: int,
) -> KarmaDelta:
    """Move the content author's karma bucket for a committed score change.

    Must run inside the same unit of work as the counter update.
    """
    delta = compute_karma_delta(
        content.target.kind,
        delta_score,
        voter_is_author=voter_id == content.author_id,
    )
    users.apply_karma_delta(content.author_id, delta)
    return delta


def get_user_karma(session: Session, user_id: int) -> KarmaBreakdown:
    """Return the stored karma buckets for ``user_id``.

    Raises:
        NotFoundError: If the user does not exist.
    """
    karma = UserRepository(session).read_karma(user_id)
    if karma is None:
        raise NotFoundError("User not found")
    return karma
