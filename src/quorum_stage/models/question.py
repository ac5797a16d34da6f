# src/quorum_stage/models/question.py
"""SQLAlchemy model for questions."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quorum_stage.db.session import Base
from quorum_stage.db.time import utcnow
from quorum_stage.models.enums import QuestionStatus, enum_column
from quorum_stage.models.mixins import ContentMixin


class Question(ContentMixin, Base):
    """Top-level content item that answers attach to."""

    __tablename__ = "question"
    __table_args__ = (
        CheckConstraint("answers_count >= 0", name="ck_question_answers_count"),
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    # open -> under review -> open | rejected | removed; resolved once answered.
    status: Mapped[QuestionStatus] = mapped_column(
        enum_column(QuestionStatus, "question_status"),
        nullable=False,
        default=QuestionStatus.OPEN,
        index=True,
    )
    answers_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_activity_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
