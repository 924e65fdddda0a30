"""Karma and counter response schemas."""

from pydantic import BaseModel


class KarmaResponse(BaseModel):
    """Karma buckets for a user.

    ``awardee`` and ``awarder`` are maintained by the awards subsystem and
    are reported as stored.
    """

    post: int
    comment: int
    awardee: int
    awarder: int
    total: int


class CountersResponse(BaseModel):
    """Vote counters of a single post or comment."""

    upvotes: int
    downvotes: int
    score: int
