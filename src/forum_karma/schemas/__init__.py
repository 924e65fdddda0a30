"""Pydantic schemas for the forum karma API."""

from .karma import CountersResponse, KarmaResponse
from .moderation import RetractVoteRequest
from .vote import MyVoteResponse, VoteCreate, VoteResult

__all__ = [
    "CountersResponse",
    "KarmaResponse",
    "MyVoteResponse",
    "RetractVoteRequest",
    "VoteCreate",
    "VoteResult",
]
