"""Vote-related endpoints for the forum API."""

from fastapi import APIRouter, status

from forum_karma.api.v1.dependencies import (
    CurrentUserDep,
    SessionDep,
    VotingServiceDep,
    raise_http_error,
)
from forum_karma.core.errors import VoteError
from forum_karma.domain.targets import TargetKind, make_target
from forum_karma.schemas.vote import MyVoteResponse, VoteCreate, VoteResult

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResult, status_code=status.HTTP_200_OK)
def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
    voting: VotingServiceDep,
) -> VoteResult:
    """Cast, change or retract the caller's vote on a post or comment."""
    target = make_target(vote_data.target_kind, vote_data.target_id)
    try:
        outcome = voting.cast_vote(db, target, current_user.id, vote_data.value)
    except VoteError as err:
        raise_http_error(err)
    return VoteResult(
        value=outcome.value,
        upvotes=outcome.upvotes,
        downvotes=outcome.downvotes,
        score=outcome.score,
    )


@router.get("/{target_kind}/{target_id}/my-vote", response_model=MyVoteResponse)
def get_my_vote(
    target_kind: TargetKind,
    target_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    voting: VotingServiceDep,
) -> MyVoteResponse:
    """Get the current user's vote on a specific post or comment."""
    try:
        value = voting.get_my_vote(db, make_target(target_kind, target_id), current_user.id)
    except VoteError as err:
        raise_http_error(err)
    return MyVoteResponse(value=value)


@router.delete("/{vote_id}", response_model=VoteResult)
def delete_vote(
    vote_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
    voting: VotingServiceDep,
) -> VoteResult:
    """Withdraw one of the caller's own votes by id."""
    try:
        outcome = voting.retract_own_vote(db, vote_id, current_user.id)
    except VoteError as err:
        raise_http_error(err)
    return VoteResult(
        value=outcome.value,
        upvotes=outcome.upvotes,
        downvotes=outcome.downvotes,
        score=outcome.score,
    )
