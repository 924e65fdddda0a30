"""Data access helpers used by the voting engine."""

from .content_repo import ContentRef, ContentRepository, Counters
from .user_repo import KarmaBreakdown, UserRepository
from .vote_repo import VoteRepository

__all__ = [
    "ContentRef",
    "ContentRepository",
    "Counters",
    "KarmaBreakdown",
    "UserRepository",
    "VoteRepository",
]
