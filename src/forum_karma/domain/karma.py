"""Karma delta rule for the author of voted-on content."""

from __future__ import annotations

from typing import NamedTuple

from forum_karma.domain.targets import TargetKind

KARMA_BUCKET_POST = "karma_post"
KARMA_BUCKET_COMMENT = "karma_comment"


class KarmaDelta(NamedTuple):
    """Amount to add to one of the author's karma buckets."""

    bucket: str
    amount: int


def karma_bucket(kind: TargetKind) -> str:
    """Return the ``User`` column that accumulates karma for ``kind`` content."""
    return KARMA_BUCKET_POST if kind is TargetKind.POST else KARMA_BUCKET_COMMENT


def compute_karma_delta(kind: TargetKind, delta_score: int, voter_is_author: bool) -> KarmaDelta:
    """Return how the author's karma moves for a transition on ``kind`` content.

    Votes an author casts on their own content never count toward karma.
    """
    amount = 0 if voter_is_author else delta_score
    return KarmaDelta(bucket=karma_bucket(kind), amount=amount)
