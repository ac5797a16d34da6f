# src/quorum_stage/services/moderation.py
"""Moderation coordinator for Quorum.

Applies moderator and admin decisions to content and keeps the reports that
point at that content consistent with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy import and_, case, delete, func, or_, select, update
from sqlalchemy.orm import Session

from quorum_stage.core.security import Actor
from quorum_stage.models import Answer, ContentVote, Question, Report, User
from quorum_stage.models.enums import (
    ActionTaken,
    ContentKind,
    ModerationAction,
    ReportStatus,
)
from quorum_stage.services.cascade import CascadeStep, run_cascade
from quorum_stage.services.errors import (
    AlreadyResolvedError,
    InvalidTransitionError,
    ModerationError,
    NotFoundError,
    PermissionDeniedError,
)
from quorum_stage.services.lifecycle import (
    Content,
    ContentLifecycle,
    parse_choice,
    profile_for,
)
from quorum_stage.services.reports import ReportPipeline, report_target
from quorum_stage.services.votes import VoteLedger

logger = logging.getLogger(__name__)

ACTION_OUTCOMES: dict[ModerationAction, ActionTaken] = {
    ModerationAction.APPROVE: ActionTaken.NONE,
    ModerationAction.REJECT: ActionTaken.NONE,
    ModerationAction.DISMISS: ActionTaken.NONE,
    ModerationAction.WARN: ActionTaken.WARNING,
    ModerationAction.REMOVE: ActionTaken.CONTENT_REMOVED,
    ModerationAction.DELETE: ActionTaken.CONTENT_REMOVED,
}


@dataclass
class ModerationOutcome:
    """What a single moderation decision did."""

    kind: ContentKind
    content_id: int
    action: ModerationAction
    content: Content | None
    reports_closed: int
    deleted: dict[str, int] = field(default_factory=dict)


@dataclass
class UserDeletionResult:
    """Row counts removed (or closed) when an account is deleted."""

    deleted_questions: int
    deleted_answers: int
    deleted_reports: int
    deleted_votes: int
    closed_reports: int


def _vote_target(kind: ContentKind, content_ids):
    if isinstance(content_ids, int):
        return and_(ContentVote.content_type == kind, ContentVote.content_id == content_ids)
    return and_(ContentVote.content_type == kind, ContentVote.content_id.in_(content_ids))


class ModerationCoordinator:
    """Service orchestrating reports, lifecycle transitions and cascades."""

    def __init__(
        self,
        lifecycle: ContentLifecycle | None = None,
        reports: ReportPipeline | None = None,
        votes: VoteLedger | None = None,
    ) -> None:
        self.lifecycle = lifecycle or ContentLifecycle()
        self.reports = reports or ReportPipeline(self.lifecycle)
        self.votes = votes or VoteLedger(self.lifecycle)

    @staticmethod
    def _require_moderator(actor: Actor) -> None:
        if not actor.is_moderation_actor:
            raise PermissionDeniedError("Moderator or admin role required")

    def resolve_report(
        self,
        db: Session,
        report_id: int,
        actor: Actor,
        action: ModerationAction | str,
        note: str | None = None,
    ) -> Report:
        """Decide a pending report and apply the decision to its content.

        Every other pending report against the same item is closed with the
        same decision. ``dismiss`` closes only this report and leaves the
        content untouched.

        Raises:
            NotFoundError: If the report (or its content) does not exist.
            AlreadyResolvedError: If the report is no longer pending.
            InvalidTransitionError: If the action is not valid for the content.
        """
        self._require_moderator(actor)
        action = parse_choice(ModerationAction, action, "moderation action")
        report = self.reports.get(db, report_id)
        if action is not ModerationAction.DISMISS and report.status == ReportStatus.PENDING:
            # Content row before report rows, the order every decision on the item uses.
            try:
                self.lifecycle.lock(db, report.content_type, report.content_id)
            except NotFoundError:
                db.rollback()
                raise
        report = self.reports.lock(db, report_id)
        if report.status != ReportStatus.PENDING:
            status = report.status.value
            db.rollback()
            raise AlreadyResolvedError(f"Report {report_id} has already been {status}")

        if action is ModerationAction.DISMISS:
            self.reports.close_pending(
                db,
                Report.id == report_id,
                actor=actor,
                note=note,
                action_taken=ActionTaken.NONE,
                status=ReportStatus.DISMISSED,
            )
            db.commit()
            logger.info("Report %s dismissed by user %s", report_id, actor.id)
        else:
            self._apply(db, report.content_type, report.content_id, actor, action, note)

        db.refresh(report)
        return report

    def moderate_content(
        self,
        db: Session,
        kind: ContentKind,
        content_id: int,
        actor: Actor,
        action: ModerationAction | str,
        note: str | None = None,
    ) -> ModerationOutcome:
        """Apply a decision directly to an item, closing all its pending reports."""
        self._require_moderator(actor)
        action = parse_choice(ModerationAction, action, "moderation action")
        if action is ModerationAction.DISMISS:
            raise InvalidTransitionError("Dismissal applies to reports, not content")
        return self._apply(db, profile_for(kind).kind, content_id, actor, action, note)

    def _apply(
        self,
        db: Session,
        kind: ContentKind,
        content_id: int,
        actor: Actor,
        action: ModerationAction,
        note: str | None,
    ) -> ModerationOutcome:
        if action is ModerationAction.DELETE:
            counts = self.delete_content(db, kind, content_id, actor, note)
            return ModerationOutcome(
                kind=kind,
                content_id=content_id,
                action=action,
                content=None,
                reports_closed=counts.get("reports", 0),
                deleted=counts,
            )

        profile = profile_for(kind)
        try:
            content = self.lifecycle.lock(db, kind, content_id)
            if action is ModerationAction.WARN:
                # Delivery is handled by the notification service.
                logger.info(
                    "Warning issued to user %s over %s %s by user %s",
                    content.user_id,
                    kind.value,
                    content_id,
                    actor.id,
                )
            else:
                self.lifecycle.apply_action(content, profile, action, actor, note)
            closed = self.reports.close_pending(
                db,
                report_target(kind, content_id),
                actor=actor,
                note=note,
                action_taken=ACTION_OUTCOMES[action],
            )
        except ModerationError:
            db.rollback()
            raise
        db.commit()
        db.refresh(content)
        logger.info(
            "%s on %s %s by user %s closed %d pending report(s)",
            action.value,
            kind.value,
            content_id,
            actor.id,
            closed,
        )
        return ModerationOutcome(
            kind=kind,
            content_id=content_id,
            action=action,
            content=content,
            reports_closed=closed,
        )

    def delete_content(
        self,
        db: Session,
        kind: ContentKind,
        content_id: int,
        actor: Actor,
        note: str | None = None,
    ) -> dict[str, int]:
        """Hard-delete an item and everything that depends on it.

        Pending reports against removed items are closed as
        ``content_removed`` rather than deleted, so they remain as audit
        records whose content reference no longer resolves.

        Raises:
            NotFoundError: If the item does not exist.
            CascadeFailureError: If the cascade could not be committed.
        """
        self._require_moderator(actor)
        kind = profile_for(kind).kind
        self.lifecycle.get(db, kind, content_id)
        if kind is ContentKind.QUESTION:
            steps = self._question_cascade(content_id, actor, note)
        else:
            steps = self._answer_cascade(content_id, actor, note)
        counts = run_cascade(db, steps)
        logger.info("Deleted %s %s by user %s: %s", kind.value, content_id, actor.id, counts)
        return counts

    def _question_cascade(
        self, question_id: int, actor: Actor, note: str | None
    ) -> list[CascadeStep]:
        answer_ids = select(Answer.id).where(Answer.question_id == question_id)

        def lock(db: Session) -> int:
            rows = db.execute(
                select(Question.id).where(Question.id == question_id).with_for_update()
            ).all()
            return len(rows)

        def close_reports(db: Session) -> int:
            return self.reports.close_pending(
                db,
                or_(
                    report_target(ContentKind.QUESTION, question_id),
                    report_target(ContentKind.ANSWER, answer_ids),
                ),
                actor=actor,
                note=note,
                action_taken=ActionTaken.CONTENT_REMOVED,
            )

        def delete_votes(db: Session) -> int:
            return db.execute(
                delete(ContentVote)
                .where(
                    or_(
                        _vote_target(ContentKind.QUESTION, question_id),
                        _vote_target(ContentKind.ANSWER, answer_ids),
                    )
                )
                .execution_options(synchronize_session=False)
            ).rowcount

        def delete_answers(db: Session) -> int:
            return db.execute(
                delete(Answer)
                .where(Answer.question_id == question_id)
                .execution_options(synchronize_session=False)
            ).rowcount

        def delete_question(db: Session) -> int:
            return db.execute(
                delete(Question)
                .where(Question.id == question_id)
                .execution_options(synchronize_session=False)
            ).rowcount

        return [
            CascadeStep("lock", lock),
            CascadeStep("reports", close_reports),
            CascadeStep("votes", delete_votes),
            CascadeStep("answers", delete_answers),
            CascadeStep("question", delete_question),
        ]

    def _answer_cascade(self, answer_id: int, actor: Actor, note: str | None) -> list[CascadeStep]:
        def lock(db: Session) -> int:
            rows = db.execute(
                select(Answer.id).where(Answer.id == answer_id).with_for_update()
            ).all()
            return len(rows)

        def close_reports(db: Session) -> int:
            return self.reports.close_pending(
                db,
                report_target(ContentKind.ANSWER, answer_id),
                actor=actor,
                note=note,
                action_taken=ActionTaken.CONTENT_REMOVED,
            )

        def delete_votes(db: Session) -> int:
            return db.execute(
                delete(ContentVote)
                .where(_vote_target(ContentKind.ANSWER, answer_id))
                .execution_options(synchronize_session=False)
            ).rowcount

        def delete_answer(db: Session) -> int:
            question_id = db.execute(
                select(Answer.question_id).where(Answer.id == answer_id).with_for_update()
            ).scalar_one_or_none()
            if question_id is None:
                return 0
            deleted = db.execute(
                delete(Answer)
                .where(Answer.id == answer_id)
                .execution_options(synchronize_session=False)
            ).rowcount
            if deleted:
                # The count never drops below zero, even for a stale counter.
                db.execute(
                    update(Question)
                    .where(Question.id == question_id, Question.answers_count > 0)
                    .values(answers_count=Question.answers_count - 1)
                    .execution_options(synchronize_session=False)
                )
            return deleted

        return [
            CascadeStep("lock", lock),
            CascadeStep("reports", close_reports),
            CascadeStep("votes", delete_votes),
            CascadeStep("answer", delete_answer),
        ]

    def delete_user(self, db: Session, actor: Actor, user_id: int) -> UserDeletionResult:
        """Delete an account together with everything it authored.

        Removes the user's questions (with all their answers), the user's
        answers elsewhere, the reports the user filed and the user's votes.
        Scores of surviving items the user voted on are recomputed, and
        pending reports against removed items are closed. Applied as one
        cascade: either all of it is committed or none of it.

        Raises:
            PermissionDeniedError: If the actor is not an admin.
            NotFoundError: If the user does not exist.
            CascadeFailureError: If the cascade could not be committed.
        """
        if not actor.is_admin:
            raise PermissionDeniedError("Admin role required")
        if db.get(User, user_id) is None:
            raise NotFoundError(f"User {user_id} not found")

        question_ids = select(Question.id).where(Question.user_id == user_id)
        answer_ids = select(Answer.id).where(
            or_(Answer.user_id == user_id, Answer.question_id.in_(question_ids))
        )
        note = f"Author account {user_id} deleted"

        def delete_filed_reports(db: Session) -> int:
            return db.execute(
                delete(Report)
                .where(Report.reported_by_id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount

        def close_reports(db: Session) -> int:
            return self.reports.close_pending(
                db,
                or_(
                    report_target(ContentKind.QUESTION, question_ids),
                    report_target(ContentKind.ANSWER, answer_ids),
                ),
                actor=actor,
                note=note,
                action_taken=ActionTaken.CONTENT_REMOVED,
            )

        def delete_votes(db: Session) -> int:
            touched = db.execute(
                select(ContentVote.content_type, ContentVote.content_id).where(
                    ContentVote.voter_user_id == user_id
                )
            ).all()
            deleted = db.execute(
                delete(ContentVote)
                .where(
                    or_(
                        ContentVote.voter_user_id == user_id,
                        _vote_target(ContentKind.QUESTION, question_ids),
                        _vote_target(ContentKind.ANSWER, answer_ids),
                    )
                )
                .execution_options(synchronize_session=False)
            ).rowcount
            self.votes.sync_aggregates(db, [(kind, content_id) for kind, content_id in touched])
            return deleted

        def adjust_answer_counts(db: Session) -> int:
            parents = db.execute(
                select(Answer.question_id, func.count())
                .where(Answer.user_id == user_id, Answer.question_id.not_in(question_ids))
                .group_by(Answer.question_id)
            ).all()
            for question_id, removed in parents:
                db.execute(
                    update(Question)
                    .where(Question.id == question_id)
                    .values(
                        answers_count=case(
                            (Question.answers_count > removed, Question.answers_count - removed),
                            else_=0,
                        )
                    )
                    .execution_options(synchronize_session=False)
                )
            return len(parents)

        def delete_answers(db: Session) -> int:
            return db.execute(
                delete(Answer)
                .where(or_(Answer.user_id == user_id, Answer.question_id.in_(question_ids)))
                .execution_options(synchronize_session=False)
            ).rowcount

        def delete_questions(db: Session) -> int:
            return db.execute(
                delete(Question)
                .where(Question.user_id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount

        def delete_account(db: Session) -> int:
            return db.execute(
                delete(User)
                .where(User.id == user_id)
                .execution_options(synchronize_session=False)
            ).rowcount

        counts = run_cascade(
            db,
            [
                CascadeStep("filed_reports", delete_filed_reports),
                CascadeStep("reports", close_reports),
                CascadeStep("votes", delete_votes),
                CascadeStep("answer_counts", adjust_answer_counts),
                CascadeStep("answers", delete_answers),
                CascadeStep("questions", delete_questions),
                CascadeStep("user", delete_account),
            ],
        )
        logger.info("Deleted user %s by admin %s: %s", user_id, actor.id, counts)
        return UserDeletionResult(
            deleted_questions=counts["questions"],
            deleted_answers=counts["answers"],
            deleted_reports=counts["filed_reports"],
            deleted_votes=counts["votes"],
            closed_reports=counts["reports"],
        )
