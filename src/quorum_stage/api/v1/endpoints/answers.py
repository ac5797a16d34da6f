"""Answer endpoints for the Quorum API."""

from __future__ import annotations

from fastapi import APIRouter, status

from quorum_stage.api.v1.dependencies import (
    ActorDep,
    CurrentUserDep,
    LifecycleDep,
    SessionDep,
    raise_http,
)
from quorum_stage.models import Answer
from quorum_stage.models.enums import ContentKind
from quorum_stage.schemas.content import AnswerCreate, AnswerResponse, StatusChange
from quorum_stage.services import content as content_service
from quorum_stage.services.errors import ModerationError

router = APIRouter(prefix="/answers", tags=["answers"])


@router.post("", response_model=AnswerResponse, status_code=status.HTTP_201_CREATED)
async def create_answer(
    answer_data: AnswerCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Answer:
    """Answer a question and bump its answer count."""
    try:
        return content_service.create_answer(
            db,
            author_id=current_user.id,
            question_id=answer_data.question_id,
            content=answer_data.content,
        )
    except ModerationError as err:
        raise_http(err)


@router.get("/mine", response_model=list[AnswerResponse])
async def get_my_answers(current_user: CurrentUserDep, db: SessionDep) -> list[Answer]:
    return content_service.answers_by_author(db, current_user.id)


@router.get("/{answer_id}", response_model=AnswerResponse)
async def get_answer(answer_id: int, lifecycle: LifecycleDep, db: SessionDep) -> Answer:
    try:
        return lifecycle.get(db, ContentKind.ANSWER, answer_id)
    except ModerationError as err:
        raise_http(err)


@router.put("/{answer_id}/status", response_model=AnswerResponse)
async def change_answer_status(
    answer_id: int,
    change: StatusChange,
    actor: ActorDep,
    lifecycle: LifecycleDep,
    db: SessionDep,
) -> Answer:
    """Change an answer's status (moderators and admins only)."""
    try:
        return lifecycle.change_status(
            db, ContentKind.ANSWER, answer_id, actor, change.status, change.note
        )
    except ModerationError as err:
        raise_http(err)


@router.put("/{answer_id}/accept", response_model=AnswerResponse)
async def accept_answer(answer_id: int, actor: ActorDep, db: SessionDep) -> Answer:
    """Accept an answer to one of the caller's own questions."""
    try:
        return content_service.accept_answer(db, answer_id, actor)
    except ModerationError as err:
        raise_http(err)
