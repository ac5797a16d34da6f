# src/quorum_stage/models/answer.py
"""SQLAlchemy model for answers."""

from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quorum_stage.db.session import Base
from quorum_stage.models.enums import AnswerStatus, enum_column
from quorum_stage.models.mixins import ContentMixin


class Answer(ContentMixin, Base):
    """Reply to a question; deleted together with its parent."""

    __tablename__ = "answer"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    status: Mapped[AnswerStatus] = mapped_column(
        enum_column(AnswerStatus, "answer_status"),
        nullable=False,
        default=AnswerStatus.ACTIVE,
    )
    is_accepted: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
