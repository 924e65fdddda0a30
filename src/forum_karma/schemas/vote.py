"""Vote-related Pydantic schemas."""

from pydantic import BaseModel, Field

from forum_karma.domain.targets import TargetKind


class VoteCreate(BaseModel):
    """Schema for casting, changing or retracting a vote."""

    target_kind: TargetKind
    target_id: int
    # Range is checked by the voting engine so that it reports InvalidArgument.
    value: int = Field(..., description="1 for upvote, -1 for downvote, 0 to retract")


class VoteResult(BaseModel):
    """Authoritative vote state returned after an operation."""

    value: int
    upvotes: int
    downvotes: int
    score: int


class MyVoteResponse(BaseModel):
    """Caller's current vote on a target; 0 means no vote."""

    value: int
