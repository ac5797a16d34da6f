# src/quorum_stage/schemas/report.py
"""Report-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quorum_stage.models.enums import (
    ActionTaken,
    ContentKind,
    ReportSeverity,
    ReportStatus,
)


class ReportCreate(BaseModel):
    """Schema for filing a report against a question or answer."""

    content_type: ContentKind
    content_id: int
    reason: str = Field(..., min_length=1, max_length=200)
    details: str | None = Field(None, max_length=2000)
    severity: ReportSeverity | None = Field(
        None, description="Defaults by reporter role when omitted"
    )


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    id: int
    content_type: ContentKind
    content_id: int
    reported_by_id: int
    reason: str
    details: str | None
    severity: ReportSeverity
    status: ReportStatus
    action_taken: ActionTaken
    moderator_note: str | None
    moderated_by_id: int | None
    moderated_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
