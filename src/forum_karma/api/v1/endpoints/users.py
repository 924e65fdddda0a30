"""User karma endpoints."""

from fastapi import APIRouter

from forum_karma.api.v1.dependencies import SessionDep, raise_http_error
from forum_karma.core.errors import VoteError
from forum_karma.schemas.karma import KarmaResponse
from forum_karma.services.ledger import get_user_karma

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/karma", response_model=KarmaResponse)
def read_user_karma(user_id: int, db: SessionDep) -> KarmaResponse:
    """Return a user's stored karma breakdown."""
    try:
        karma = get_user_karma(db, user_id)
    except VoteError as err:
        raise_http_error(err)
    return KarmaResponse(
        post=karma.post,
        comment=karma.comment,
        awardee=karma.awardee,
        awarder=karma.awarder,
        total=karma.total,
    )
