"""Moderation-related Pydantic schemas."""

from pydantic import BaseModel, Field

from forum_karma.models.moderation import MODLOG_REASON_MAX_LENGTH


class RetractVoteRequest(BaseModel):
    """Schema for an administrator removing a vote."""

    reason: str = Field(..., min_length=1, max_length=MODLOG_REASON_MAX_LENGTH)
