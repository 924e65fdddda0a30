"""Tests for the karma delta rule."""

from forum_karma.domain.karma import (
    KARMA_BUCKET_COMMENT,
    KARMA_BUCKET_POST,
    KarmaDelta,
    compute_karma_delta,
)
from forum_karma.domain.targets import TargetKind


def test_post_votes_move_post_bucket() -> None:
    assert compute_karma_delta(TargetKind.POST, 2, False) == KarmaDelta(KARMA_BUCKET_POST, 2)


def test_comment_votes_move_comment_bucket() -> None:
    assert compute_karma_delta(TargetKind.COMMENT, -1, False) == KarmaDelta(
        KARMA_BUCKET_COMMENT, -1
    )


def test_author_votes_never_count() -> None:
    delta = compute_karma_delta(TargetKind.POST, 1, True)
    assert delta.amount == 0
    assert delta.bucket == KARMA_BUCKET_POST
