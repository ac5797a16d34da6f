# src/quorum_stage/services/reports.py
"""Report pipeline: user complaints and the decisions that close them."""

from __future__ import annotations

import logging

from sqlalchemy import ColumnElement, Select, and_, select, update
from sqlalchemy.orm import Session

from quorum_stage.core.security import Actor
from quorum_stage.core.settings import settings
from quorum_stage.db.time import utcnow
from quorum_stage.models import Report
from quorum_stage.models.enums import (
    ActionTaken,
    ContentKind,
    ReportSeverity,
    ReportStatus,
)
from quorum_stage.services.errors import NotFoundError
from quorum_stage.services.lifecycle import ContentLifecycle, parse_choice, profile_for

logger = logging.getLogger(__name__)


def report_target(kind: ContentKind, content_ids: int | Select) -> ColumnElement[bool]:
    """Build the predicate matching reports against one item or a set of items."""
    if isinstance(content_ids, int):
        id_clause = Report.content_id == content_ids
    else:
        id_clause = Report.content_id.in_(content_ids)
    return and_(Report.content_type == kind, id_clause)


class ReportPipeline:
    """Service recording reports and closing them on moderation decisions."""

    def __init__(self, lifecycle: ContentLifecycle | None = None) -> None:
        self.lifecycle = lifecycle or ContentLifecycle()

    def submit_report(
        self,
        db: Session,
        actor: Actor,
        kind: ContentKind,
        content_id: int,
        reason: str,
        details: str | None = None,
        severity: ReportSeverity | str | None = None,
    ) -> Report:
        """File a new pending report against a question or answer.

        Every submission creates its own report, even if others are already
        pending for the same item. A report filed by a moderation actor is
        high priority and pushes the item into its review state.

        Raises:
            NotFoundError: If the reported item does not exist.
        """
        profile = profile_for(kind)
        kind = profile.kind
        if severity is None:
            severity = (
                settings.moderator_report_severity
                if actor.is_moderation_actor
                else settings.default_report_severity
            )
        severity = parse_choice(ReportSeverity, severity, "report severity")
        content = self.lifecycle.lock(db, kind, content_id)

        report = Report(
            content_type=kind,
            content_id=content_id,
            reported_by_id=actor.id,
            reason=reason,
            details=details,
            severity=severity,
            status=ReportStatus.PENDING,
            action_taken=ActionTaken.NONE,
        )
        db.add(report)
        if actor.is_moderation_actor:
            self.lifecycle.mark_for_review(content, profile, actor, details or reason)

        db.commit()
        db.refresh(report)
        logger.info(
            "Report %s filed by user %s against %s %s (%s)",
            report.id,
            actor.id,
            kind.value,
            content_id,
            report.severity.value,
        )
        return report

    @staticmethod
    def get(db: Session, report_id: int) -> Report:
        report = db.get(Report, report_id)
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        return report

    @staticmethod
    def lock(db: Session, report_id: int) -> Report:
        """Load a report for update so two decisions on it cannot interleave."""
        report = db.execute(
            select(Report)
            .where(Report.id == report_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if report is None:
            raise NotFoundError(f"Report {report_id} not found")
        return report

    @staticmethod
    def list_reports(
        db: Session,
        status: ReportStatus | None = None,
        kind: ContentKind | None = None,
        limit: int = 50,
    ) -> list[Report]:
        """Return the newest reports, optionally filtered by status and kind."""
        stmt = select(Report)
        if status is not None:
            stmt = stmt.where(Report.status == status)
        if kind is not None:
            stmt = stmt.where(Report.content_type == kind)
        stmt = stmt.order_by(Report.created_at.desc(), Report.id.desc()).limit(limit)
        return list(db.execute(stmt).scalars())

    @staticmethod
    def history(db: Session, kind: ContentKind, content_id: int) -> list[Report]:
        """Return every report ever filed against an item, newest first."""
        stmt = (
            select(Report)
            .where(report_target(kind, content_id))
            .order_by(Report.created_at.desc(), Report.id.desc())
        )
        return list(db.execute(stmt).scalars())

    @staticmethod
    def pending_for(db: Session, kind: ContentKind, content_id: int) -> list[Report]:
        stmt = select(Report).where(
            report_target(kind, content_id),
            Report.status == ReportStatus.PENDING,
        )
        return list(db.execute(stmt).scalars())

    @staticmethod
    def close_pending(
        db: Session,
        target: ColumnElement[bool],
        *,
        actor: Actor,
        note: str | None,
        action_taken: ActionTaken,
        status: ReportStatus = ReportStatus.REVIEWED,
    ) -> int:
        """Close every still-pending report matching ``target`` in one statement.

        All matched reports receive the same moderator, timestamp, note and
        outcome. Reports that are already closed are never touched, which
        makes the statement safe to repeat. Does not commit.
        """
        result = db.execute(
            update(Report)
            .where(target, Report.status == ReportStatus.PENDING)
            .values(
                status=status,
                action_taken=action_taken,
                moderator_note=note,
                moderated_by_id=actor.id,
                moderated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount or 0
