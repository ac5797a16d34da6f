# src/quorum_stage/models/report.py
"""Models tracking user reports against content."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quorum_stage.db.session import Base
from quorum_stage.db.time import utcnow
from quorum_stage.models.enums import (
    ActionTaken,
    ContentKind,
    ReportSeverity,
    ReportStatus,
    enum_column,
)
from quorum_stage.models.mixins import ModerationStampMixin


class Report(ModerationStampMixin, Base):
    """A single user complaint about a question or answer.

    ``content_id`` is a weak reference: the reported item may be deleted
    while the report is kept as an audit record.
    """

    __tablename__ = "report"
    __table_args__ = (
        Index("ix_report_content", "content_type", "content_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    content_type: Mapped[ContentKind] = mapped_column(
        enum_column(ContentKind, "content_kind"),
        nullable=False,
    )
    content_id: Mapped[int] = mapped_column(Integer, nullable=False)
    reported_by_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    severity: Mapped[ReportSeverity] = mapped_column(
        enum_column(ReportSeverity, "report_severity"),
        nullable=False,
        default=ReportSeverity.MEDIUM,
    )
    # pending until a moderation decision, then reviewed or dismissed exactly once.
    status: Mapped[ReportStatus] = mapped_column(
        enum_column(ReportStatus, "report_status"),
        nullable=False,
        default=ReportStatus.PENDING,
    )
    action_taken: Mapped[ActionTaken] = mapped_column(
        enum_column(ActionTaken, "action_taken"),
        nullable=False,
        default=ActionTaken.NONE,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
