"""Error taxonomy surfaced by the voting engine.

Every failure the engine reports is one of these kinds. Argument, existence
and authorization failures are raised before any write; ``ConflictError`` and
``InternalError`` are raised only after the store has rolled the unit of work
back, so no partial state is ever visible to the caller.
"""

from __future__ import annotations


class VoteError(Exception):
    """Base class for every error raised by the voting engine."""

    code = "internal"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidArgumentError(VoteError):
    """Requested vote value is outside of {-1, 0, 1}."""

    code = "invalid_argument"


class NotFoundError(VoteError):
    """Target content, user or vote does not exist."""

    code = "not_found"


class ForbiddenError(VoteError):
    """Caller may not perform this transition (self-vote, locked content)."""

    code = "forbidden"


class ConflictError(VoteError):
    """Transaction contention; the caller should retry."""

    code = "conflict"


class InternalError(VoteError):
    """Storage failure below the unit-of-work abstraction."""

    code = "internal"


__all__ = [
    "VoteError",
    "InvalidArgumentError",
    "NotFoundError",
    "ForbiddenError",
    "ConflictError",
    "InternalError",
]
