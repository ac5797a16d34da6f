"""Question endpoints for the Quorum API."""

from __future__ import annotations

from fastapi import APIRouter, Query, status

from quorum_stage.api.v1.dependencies import (
    ActorDep,
    CurrentUserDep,
    LifecycleDep,
    ModeratorDep,
    SessionDep,
    raise_http,
)
from quorum_stage.models import Answer, Question
from quorum_stage.models.enums import ContentKind
from quorum_stage.schemas.content import (
    AnswerResponse,
    QuestionCreate,
    QuestionResponse,
    StatusChange,
)
from quorum_stage.services import content as content_service
from quorum_stage.services.errors import ModerationError

router = APIRouter(prefix="/questions", tags=["questions"])


@router.post("", response_model=QuestionResponse, status_code=status.HTTP_201_CREATED)
async def create_question(
    question_data: QuestionCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Question:
    """Post a new question."""
    return content_service.create_question(
        db,
        author_id=current_user.id,
        title=question_data.title,
        description=question_data.description,
        category=question_data.category,
        tags=question_data.tags,
    )


@router.get("/review-queue", response_model=list[QuestionResponse])
async def get_review_queue(
    _moderator: ModeratorDep,
    db: SessionDep,
    limit: int = Query(50, ge=1, le=100),
) -> list[Question]:
    """List questions waiting for a moderator, oldest first."""
    return content_service.review_queue(db, limit=limit)


@router.get("/mine", response_model=list[QuestionResponse])
async def get_my_questions(current_user: CurrentUserDep, db: SessionDep) -> list[Question]:
    """List the caller's own questions, newest first."""
    return content_service.questions_by_author(db, current_user.id)


@router.get("/{question_id}", response_model=QuestionResponse)
async def get_question(question_id: int, lifecycle: LifecycleDep, db: SessionDep) -> Question:
    try:
        return lifecycle.get(db, ContentKind.QUESTION, question_id)
    except ModerationError as err:
        raise_http(err)


@router.put("/{question_id}/status", response_model=QuestionResponse)
async def change_question_status(
    question_id: int,
    change: StatusChange,
    actor: ActorDep,
    lifecycle: LifecycleDep,
    db: SessionDep,
) -> Question:
    """Change a question's status.

    Authors may mark their own question resolved; any other change needs a
    moderator or admin.
    """
    try:
        return lifecycle.change_status(
            db, ContentKind.QUESTION, question_id, actor, change.status, change.note
        )
    except ModerationError as err:
        raise_http(err)


@router.get("/{question_id}/answers", response_model=list[AnswerResponse])
async def get_question_answers(question_id: int, db: SessionDep) -> list[Answer]:
    """List a question's answers, newest first."""
    try:
        return content_service.list_answers(db, question_id)
    except ModerationError as err:
        raise_http(err)
