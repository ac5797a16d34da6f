# src/quorum_stage/models/mixins.py
"""Column mixins shared by moderated entities."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quorum_stage.db.time import utcnow


class ModerationStampMixin:
    """Audit trail written whenever a moderation actor touches a record."""

    moderator_note: Mapped[str | None] = mapped_column(Text, nullable=True)
    moderated_by_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="SET NULL"),
        nullable=True,
    )
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class ContentMixin(ModerationStampMixin):
    """Columns common to questions and answers.

    ``votes`` is a cached aggregate of the ``content_vote`` rows for the item;
    it is only ever written by recomputing that sum.
    """

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    votes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )
