# src/quorum_stage/services/content.py
"""CRUD-style helpers for questions and answers."""
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from quorum_stage.core.security import Actor
from quorum_stage.db.time import utcnow
from quorum_stage.models import Answer, Question
from quorum_stage.models.enums import AnswerStatus, ContentKind, QuestionStatus
from quorum_stage.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
)
from quorum_stage.services.lifecycle import ContentLifecycle

__all__ = [
    "create_question",
    "create_answer",
    "accept_answer",
    "list_answers",
    "questions_by_author",
    "answers_by_author",
    "review_queue",
]

logger = logging.getLogger(__name__)

CLOSED_QUESTION_STATUSES = frozenset({QuestionStatus.REMOVED, QuestionStatus.REJECTED})


def create_question(
    db: Session,
    *,
    author_id: int,
    title: str,
    description: str,
    category: str,
    tags: Sequence[str] = (),
) -> Question:
    """Persist a new open question."""
    question = Question(
        user_id=author_id,
        title=title,
        description=description,
        category=category,
        tags=list(tags),
        status=QuestionStatus.OPEN,
    )
    db.add(question)
    db.commit()
    db.refresh(question)
    logger.info("Question %s created by user %s", question.id, author_id)
    return question


def create_answer(db: Session, *, author_id: int, question_id: int, content: str) -> Answer:
    """Persist an answer and bump its question's answer count.

    Raises:
        NotFoundError: If the question does not exist.
        InvalidTransitionError: If the question was removed or rejected.
    """
    question = ContentLifecycle.lock(db, ContentKind.QUESTION, question_id)
    if question.status in CLOSED_QUESTION_STATUSES:
        status = question.status.value
        db.rollback()
        raise InvalidTransitionError(f"Question {question_id} is {status} and takes no answers")

    answer = Answer(user_id=author_id, question_id=question_id, content=content)
    db.add(answer)
    db.execute(
        update(Question)
        .where(Question.id == question_id)
        .values(answers_count=Question.answers_count + 1, last_activity_at=utcnow())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    db.refresh(answer)
    logger.info("Answer %s created on question %s by user %s", answer.id, question_id, author_id)
    return answer


def accept_answer(db: Session, answer_id: int, actor: Actor) -> Answer:
    """Mark ``answer_id`` as the accepted answer of its question.

    Only the question's author may accept, and only an active answer. Any
    previously accepted answer on the same question is unmarked.

    Raises:
        NotFoundError: If the answer does not exist.
        PermissionDeniedError: If the actor did not ask the question.
        InvalidTransitionError: If the answer is flagged or removed.
    """
    answer = ContentLifecycle.get(db, ContentKind.ANSWER, answer_id)
    question = ContentLifecycle.lock(db, ContentKind.QUESTION, answer.question_id)
    answer = ContentLifecycle.lock(db, ContentKind.ANSWER, answer_id)
    if question.user_id != actor.id:
        db.rollback()
        raise PermissionDeniedError("Only the question's author may accept an answer")
    if answer.status is not AnswerStatus.ACTIVE:
        status = answer.status.value
        db.rollback()
        raise InvalidTransitionError(f"Answer {answer_id} is {status} and cannot be accepted")

    db.execute(
        update(Answer)
        .where(Answer.question_id == question.id, Answer.id != answer_id)
        .values(is_accepted=False)
        .execution_options(synchronize_session=False)
    )
    answer.is_accepted = True
    question.last_activity_at = utcnow()
    db.commit()
    db.refresh(answer)
    logger.info("Answer %s accepted on question %s by user %s", answer_id, question.id, actor.id)
    return answer


def list_answers(db: Session, question_id: int) -> list[Answer]:
    """Return every answer on a question, newest first.

    Raises:
        NotFoundError: If the question does not exist.
    """
    if db.get(Question, question_id) is None:
        raise NotFoundError(f"Question {question_id} not found")
    stmt = (
        select(Answer)
        .where(Answer.question_id == question_id)
        .order_by(Answer.created_at.desc(), Answer.id.desc())
    )
    return list(db.execute(stmt).scalars())


def questions_by_author(db: Session, author_id: int) -> list[Question]:
    """Return the questions a user asked, newest first."""
    stmt = (
        select(Question)
        .where(Question.user_id == author_id)
        .order_by(Question.created_at.desc(), Question.id.desc())
    )
    return list(db.execute(stmt).scalars())


def answers_by_author(db: Session, author_id: int) -> list[Answer]:
    """Return the answers a user wrote, newest first."""
    stmt = (
        select(Answer)
        .where(Answer.user_id == author_id)
        .order_by(Answer.created_at.desc(), Answer.id.desc())
    )
    return list(db.execute(stmt).scalars())


def review_queue(db: Session, limit: int = 50) -> list[Question]:
    """Return questions awaiting moderator review, oldest first."""
    stmt = (
        select(Question)
        .where(Question.status == QuestionStatus.UNDER_REVIEW)
        .order_by(Question.last_activity_at, Question.id)
        .limit(limit)
    )
    return list(db.execute(stmt).scalars())
