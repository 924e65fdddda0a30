"""Administrative endpoints: vote removal and drift reconciliation."""

from fastapi import APIRouter

from forum_karma.api.v1.dependencies import (
    AdminUserDep,
    ReconciliationServiceDep,
    RetractionServiceDep,
    SessionDep,
    raise_http_error,
)
from forum_karma.core.errors import VoteError
from forum_karma.domain.targets import TargetKind, make_target
from forum_karma.schemas.karma import CountersResponse, KarmaResponse
from forum_karma.schemas.moderation import RetractVoteRequest

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post("/votes/{vote_id}/retract")
def retract_vote(
    vote_id: int,
    payload: RetractVoteRequest,
    admin: AdminUserDep,
    db: SessionDep,
    retraction: RetractionServiceDep,
) -> dict[str, str]:
    """Remove a vote and reverse its effect on counters and karma."""
    try:
        retraction.retract(db, vote_id, admin.id, payload.reason)
    except VoteError as err:
        raise_http_error(err)
    return {}


@router.post("/users/{user_id}/karma/recompute", response_model=KarmaResponse)
def recompute_user_karma(
    user_id: int,
    admin: AdminUserDep,
    db: SessionDep,
    reconciliation: ReconciliationServiceDep,
) -> KarmaResponse:
    """Rebuild a user's post and comment karma from the vote table."""
    try:
        karma = reconciliation.recompute_user_karma(db, user_id)
    except VoteError as err:
        raise_http_error(err)
    return KarmaResponse(
        post=karma.post,
        comment=karma.comment,
        awardee=karma.awardee,
        awarder=karma.awarder,
        total=karma.total,
    )


@router.post(
    "/content/{target_kind}/{target_id}/counters/recompute",
    response_model=CountersResponse,
)
def recompute_content_counters(
    target_kind: TargetKind,
    target_id: int,
    admin: AdminUserDep,
    db: SessionDep,
    reconciliation: ReconciliationServiceDep,
) -> CountersResponse:
    """Rebuild a post's or comment's counters from the vote table."""
    try:
        counters = reconciliation.recompute_content_counters(
            db, make_target(target_kind, target_id)
        )
    except VoteError as err:
        raise_http_error(err)
    return CountersResponse(
        upvotes=counters.upvotes,
        downvotes=counters.downvotes,
        score=counters.score,
    )
