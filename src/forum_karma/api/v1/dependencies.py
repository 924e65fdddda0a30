"""Shared API dependencies for authentication and the voting services."""

from typing import Annotated, NoReturn

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from forum_karma.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
    VoteError,
)
from forum_karma.core.security import decode_access_token
from forum_karma.db.session import get_db
from forum_karma.models import User
from forum_karma.services import AdminRetractionService, ReconciliationService, VotingService

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

_ERROR_STATUS: dict[type[VoteError], int] = {
    InvalidArgumentError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    ConflictError: status.HTTP_409_CONFLICT,
}


def raise_http_error(err: VoteError) -> NoReturn:
    """Re-raise a voting engine error as the matching ``HTTPException``."""
    status_code = _ERROR_STATUS.get(type(err), status.HTTP_500_INTERNAL_SERVER_ERROR)
    raise HTTPException(status_code=status_code, detail=err.message) from err


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Raises:
        HTTPException: If the token is invalid or the user does not exist.
    """
    try:
        user_id = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_admin_user(current_user: CurrentUserDep) -> User:
    """Require the authenticated user to be an administrator."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator privileges required",
        )
    return current_user


AdminUserDep = Annotated[User, Depends(get_admin_user)]


def get_voting_service() -> VotingService:
    """Return the voting service used by the vote endpoints."""
    return VotingService()


def get_retraction_service() -> AdminRetractionService:
    """Return the administrative retraction service."""
    return AdminRetractionService()


def get_reconciliation_service() -> ReconciliationService:
    """Return the reconciliation service."""
    return ReconciliationService()


VotingServiceDep = Annotated[VotingService, Depends(get_voting_service)]
RetractionServiceDep = Annotated[AdminRetractionService, Depends(get_retraction_service)]
ReconciliationServiceDep = Annotated[ReconciliationService, Depends(get_reconciliation_service)]
