"""Tests for the counter delta rule."""

import pytest

from forum_karma.core.errors import InvalidArgumentError
from forum_karma.domain.counters import CounterDelta, compute_counter_delta, validate_vote_value


@pytest.mark.parametrize(
    ("previous", "requested", "expected"),
    [
        (0, 0, CounterDelta(0, 0, 0)),
        (0, 1, CounterDelta(1, 0, 1)),
        (0, -1, CounterDelta(0, 1, -1)),
        (1, 0, CounterDelta(-1, 0, -1)),
        (1, 1, CounterDelta(0, 0, 0)),
        (1, -1, CounterDelta(-1, 1, -2)),
        (-1, 0, CounterDelta(0, -1, 1)),
        (-1, 1, CounterDelta(1, -1, 2)),
        (-1, -1, CounterDelta(0, 0, 0)),
    ],
)
def test_transition_table(previous: int, requested: int, expected: CounterDelta) -> None:
    """Every old x new combination yields the documented deltas."""
    delta = compute_counter_delta(previous, requested)
    assert delta == expected
    assert delta.score == delta.up - delta.down


def test_noop_only_for_unchanged_value() -> None:
    assert compute_counter_delta(1, 1).is_noop
    assert compute_counter_delta(0, 0).is_noop
    assert not compute_counter_delta(0, 1).is_noop


@pytest.mark.parametrize("value", [2, -2, 10, "1", 1.0, None, True])
def test_invalid_values_rejected(value: object) -> None:
    with pytest.raises(InvalidArgumentError):
        validate_vote_value(value)


def test_invalid_previous_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        compute_counter_delta(3, 1)
