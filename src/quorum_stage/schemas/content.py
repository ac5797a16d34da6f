# src/quorum_stage/schemas/content.py
"""Question- and answer-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quorum_stage.models.enums import AnswerStatus, QuestionStatus


class QuestionCreate(BaseModel):
    """Schema for posting a new question."""

    title: str = Field(..., min_length=1, max_length=300)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1, max_length=100)
    tags: list[str] = Field(default_factory=list, max_length=10)


class QuestionResponse(BaseModel):
    """Schema for question information returned by the API."""

    id: int
    user_id: int
    title: str
    description: str
    category: str
    tags: list[str]
    status: QuestionStatus
    votes: int
    answers_count: int
    moderator_note: str | None
    moderated_by_id: int | None
    moderated_at: datetime | None
    created_at: datetime
    last_activity_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AnswerCreate(BaseModel):
    """Schema for answering a question."""

    question_id: int
    content: str = Field(..., min_length=1)


class AnswerResponse(BaseModel):
    """Schema for answer information returned by the API."""

    id: int
    user_id: int
    question_id: int
    content: str
    status: AnswerStatus
    votes: int
    is_accepted: bool
    moderator_note: str | None
    moderated_by_id: int | None
    moderated_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StatusChange(BaseModel):
    """Schema for requesting a status transition."""

    status: str = Field(..., description="Target status, e.g. 'resolved' or 'flagged'")
    note: str | None = Field(None, max_length=2000)
