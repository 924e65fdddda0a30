"""Counter delta rule for a single vote transition.

Given the value a voter previously held on a target and the value they now
request, :func:`compute_counter_delta` returns how the target's upvote,
downvote and score counters must move. It covers all nine combinations of
``{-1, 0, 1} x {-1, 0, 1}``, including the three no-op transitions.
"""

from __future__ import annotations

from typing import NamedTuple

from forum_karma.core.errors import InvalidArgumentError

UPVOTE = 1
DOWNVOTE = -1
RETRACT = 0
VALID_VOTE_VALUES = frozenset({UPVOTE, RETRACT, DOWNVOTE})


class CounterDelta(NamedTuple):
    """Signed adjustments to apply to a content item's counters."""

    up: int
    down: int
    score: int

    @property
    def is_noop(self) -> bool:
        """Return True when the transition changes nothing."""
        return self.up == 0 and self.down == 0 and self.score == 0


def validate_vote_value(value: object) -> int:
    """Return ``value`` if it is a legal vote value.

    Raises:
        InvalidArgumentError: If ``value`` is not one of -1, 0 or 1.
    """
    # bool is an int subclass; True must not pass as an upvote.
    if isinstance(value, bool) or not isinstance(value, int) or value not in VALID_VOTE_VALUES:
        raise InvalidArgumentError(f"Invalid vote value {value!r}; expected -1, 0 or 1")
    return value


def compute_counter_delta(previous: int, requested: int) -> CounterDelta:
    """Return the counter movement for a ``previous`` -> ``requested`` transition."""
    validate_vote_value(previous)
    validate_vote_value(requested)
    delta_up = int(requested == UPVOTE) - int(previous == UPVOTE)
    delta_down = int(requested == DOWNVOTE) - int(previous == DOWNVOTE)
    return CounterDelta(up=delta_up, down=delta_down, score=delta_up - delta_down)
