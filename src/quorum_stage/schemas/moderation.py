# src/quorum_stage/schemas/moderation.py
"""Moderation-related Pydantic schemas."""

from pydantic import BaseModel, Field

from quorum_stage.models.enums import ContentKind, ModerationAction


class ModerationDecision(BaseModel):
    """Schema for a moderator's decision on a report or an item."""

    action: ModerationAction
    note: str | None = Field(None, max_length=2000)


class ModerationOutcomeResponse(BaseModel):
    """Result of a direct moderation action."""

    content_type: ContentKind
    content_id: int
    action: ModerationAction
    status: str | None = Field(None, description="New status; None when the item was deleted")
    reports_closed: int
    deleted: dict[str, int] = Field(default_factory=dict)


class ContentDeletionResponse(BaseModel):
    content_type: ContentKind
    content_id: int
    deleted: dict[str, int]


class UserDeletionResponse(BaseModel):
    """Counts of records removed together with a user account."""

    user_id: int
    deleted_questions: int
    deleted_answers: int
    deleted_reports: int
    deleted_votes: int
    closed_reports: int
