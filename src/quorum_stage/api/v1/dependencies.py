"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated, NoReturn

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from quorum_stage.core.security import Actor, decode_access_token
from quorum_stage.db.session import get_db
from quorum_stage.models import User
from quorum_stage.models.enums import UserStatus
from quorum_stage.services import (
    ContentLifecycle,
    ModerationCoordinator,
    ReportPipeline,
    VoteLedger,
)
from quorum_stage.services.errors import ModerationError

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]

_credentials_error = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from JWT token.

    Raises:
        HTTPException: If the token is invalid, or the user is missing or suspended.
    """
    try:
        user_id = decode_access_token(credentials.credentials)
    except JWTError as err:
        raise _credentials_error from err
    if user_id is None:
        raise _credentials_error

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    if user.status is not UserStatus.ACTIVE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Account is not active",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_actor(current_user: CurrentUserDep) -> Actor:
    """Return the caller as the actor value the services expect."""
    return Actor.from_user(current_user)


ActorDep = Annotated[Actor, Depends(get_actor)]


def require_moderator(actor: ActorDep) -> Actor:
    if not actor.is_moderation_actor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderator or admin role required",
        )
    return actor


def require_admin(actor: ActorDep) -> Actor:
    if not actor.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin role required",
        )
    return actor


ModeratorDep = Annotated[Actor, Depends(require_moderator)]
AdminDep = Annotated[Actor, Depends(require_admin)]

_lifecycle = ContentLifecycle()
_votes = VoteLedger(_lifecycle)
_reports = ReportPipeline(_lifecycle)
_coordinator = ModerationCoordinator(_lifecycle, _reports, _votes)


def get_lifecycle() -> ContentLifecycle:
    return _lifecycle


def get_vote_ledger() -> VoteLedger:
    return _votes


def get_report_pipeline() -> ReportPipeline:
    return _reports


def get_coordinator() -> ModerationCoordinator:
    return _coordinator


LifecycleDep = Annotated[ContentLifecycle, Depends(get_lifecycle)]
VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
ReportPipelineDep = Annotated[ReportPipeline, Depends(get_report_pipeline)]
CoordinatorDep = Annotated[ModerationCoordinator, Depends(get_coordinator)]


def raise_http(err: ModerationError) -> NoReturn:
    """Translate a service error into the matching HTTP response."""
    raise HTTPException(status_code=err.status_code, detail=str(err)) from err
