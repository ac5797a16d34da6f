# mypy: ignore-errors
# tests/services/test_report_pipeline.py
"""Tests for report submission and bulk closing."""

import pytest

from quorum_stage.core.security import Actor
from quorum_stage.models import Report
from quorum_stage.models.enums import (
    ActionTaken,
    AnswerStatus,
    ContentKind,
    QuestionStatus,
    ReportSeverity,
    ReportStatus,
)
from quorum_stage.services.errors import InvalidTransitionError, NotFoundError
from quorum_stage.services.reports import ReportPipeline, report_target


@pytest.fixture()
def pipeline() -> ReportPipeline:
    return ReportPipeline()


def test_submit_creates_pending_report(db_session, pipeline, question, other_actor) -> None:
    report = pipeline.submit_report(
        db_session, other_actor, ContentKind.QUESTION, question.id, "spam"
    )

    assert report.status is ReportStatus.PENDING
    assert report.action_taken is ActionTaken.NONE
    assert report.severity is ReportSeverity.MEDIUM
    assert report.reported_by_id == other_actor.id
    db_session.refresh(question)
    assert question.status is QuestionStatus.OPEN


def test_every_submission_is_its_own_report(db_session, pipeline, question, other_actor) -> None:
    first = pipeline.submit_report(db_session, other_actor, "question", question.id, "spam")
    second = pipeline.submit_report(db_session, other_actor, "question", question.id, "spam")

    assert first.id != second.id
    pending = pipeline.pending_for(db_session, ContentKind.QUESTION, question.id)
    assert {report.id for report in pending} == {first.id, second.id}


def test_moderator_report_is_high_priority_and_queues_review(
    db_session, pipeline, question, answer, moderator_actor
) -> None:
    question_report = pipeline.submit_report(
        db_session, moderator_actor, ContentKind.QUESTION, question.id, "misleading"
    )
    answer_report = pipeline.submit_report(
        db_session,
        moderator_actor,
        ContentKind.ANSWER,
        answer.id,
        "abusive",
        details="insults another user",
    )

    assert question_report.severity is ReportSeverity.HIGH
    assert answer_report.severity is ReportSeverity.HIGH
    db_session.refresh(question)
    db_session.refresh(answer)
    assert question.status is QuestionStatus.UNDER_REVIEW
    assert answer.status is AnswerStatus.FLAGGED
    assert answer.moderator_note == "Moderator Note: insults another user"


def test_explicit_severity_wins(db_session, pipeline, answer, test_user) -> None:
    report = pipeline.submit_report(
        db_session, Actor.from_user(test_user), "answer", answer.id, "harassment", severity="high"
    )

    assert report.severity is ReportSeverity.HIGH


def test_unknown_severity_is_rejected(db_session, pipeline, question, other_actor) -> None:
    with pytest.raises(InvalidTransitionError, match="extreme"):
        pipeline.submit_report(
            db_session, other_actor, "question", question.id, "spam", severity="extreme"
        )
    assert db_session.query(Report).count() == 0


def test_report_on_missing_content(db_session, pipeline, other_actor) -> None:
    with pytest.raises(NotFoundError):
        pipeline.submit_report(db_session, other_actor, ContentKind.QUESTION, 777, "spam")
    assert db_session.query(Report).count() == 0


def test_close_pending_only_touches_pending_reports(
    db_session, pipeline, question, other_actor, moderator_actor
) -> None:
    closed_before = pipeline.submit_report(db_session, other_actor, "question", question.id, "a")
    pipeline.close_pending(
        db_session,
        Report.id == closed_before.id,
        actor=moderator_actor,
        note="not spam",
        action_taken=ActionTaken.NONE,
        status=ReportStatus.DISMISSED,
    )
    db_session.commit()
    pipeline.submit_report(db_session, other_actor, "question", question.id, "b")
    pipeline.submit_report(db_session, other_actor, "question", question.id, "c")

    closed = pipeline.close_pending(
        db_session,
        report_target(ContentKind.QUESTION, question.id),
        actor=moderator_actor,
        note="handled",
        action_taken=ActionTaken.WARNING,
    )
    db_session.commit()

    assert closed == 2
    history = pipeline.history(db_session, ContentKind.QUESTION, question.id)
    assert len(history) == 3
    dismissed = [r for r in history if r.status is ReportStatus.DISMISSED]
    reviewed = [r for r in history if r.status is ReportStatus.REVIEWED]
    assert len(dismissed) == 1
    assert dismissed[0].moderator_note == "not spam"
    assert len(reviewed) == 2
    assert all(r.action_taken is ActionTaken.WARNING for r in reviewed)
    assert all(r.moderated_by_id == moderator_actor.id for r in reviewed)
    # A second pass finds nothing left to close.
    again = pipeline.close_pending(
        db_session,
        report_target(ContentKind.QUESTION, question.id),
        actor=moderator_actor,
        note=None,
        action_taken=ActionTaken.NONE,
    )
    assert again == 0


def test_list_reports_filters(db_session, pipeline, question, answer, other_actor, test_user) -> None:
    pipeline.submit_report(db_session, other_actor, "question", question.id, "spam")
    pipeline.submit_report(db_session, Actor.from_user(test_user), "answer", answer.id, "wrong")

    assert len(pipeline.list_reports(db_session)) == 2
    answers_only = pipeline.list_reports(db_session, kind=ContentKind.ANSWER)
    assert [r.content_id for r in answers_only] == [answer.id]
    assert pipeline.list_reports(db_session, status=ReportStatus.REVIEWED) == []
    assert len(pipeline.list_reports(db_session, limit=1)) == 1
