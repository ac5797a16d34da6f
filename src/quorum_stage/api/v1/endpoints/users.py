"""User administration endpoints for the Quorum API."""

from __future__ import annotations

from fastapi import APIRouter

from quorum_stage.api.v1.dependencies import AdminDep, CoordinatorDep, SessionDep, raise_http
from quorum_stage.schemas.moderation import UserDeletionResponse
from quorum_stage.services.errors import ModerationError

router = APIRouter(prefix="/users", tags=["users"])


@router.delete("/{user_id}", response_model=UserDeletionResponse)
async def delete_user(
    user_id: int,
    admin: AdminDep,
    coordinator: CoordinatorDep,
    db: SessionDep,
) -> UserDeletionResponse:
    """Delete an account and everything it authored."""
    try:
        result = coordinator.delete_user(db, admin, user_id)
    except ModerationError as err:
        raise_http(err)
    return UserDeletionResponse(
        user_id=user_id,
        deleted_questions=result.deleted_questions,
        deleted_answers=result.deleted_answers,
        deleted_reports=result.deleted_reports,
        deleted_votes=result.deleted_votes,
        closed_reports=result.closed_reports,
    )
