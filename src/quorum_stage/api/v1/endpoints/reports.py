"""Report endpoints for the Quorum API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from quorum_stage.api.v1.dependencies import ActorDep, ReportPipelineDep, SessionDep, raise_http
from quorum_stage.models import Report
from quorum_stage.schemas.report import ReportCreate, ReportResponse
from quorum_stage.services.errors import ModerationError

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("/", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(
    report_data: ReportCreate,
    actor: ActorDep,
    pipeline: ReportPipelineDep,
    db: SessionDep,
) -> Report:
    """File a report against a question or answer."""
    try:
        return pipeline.submit_report(
            db,
            actor,
            report_data.content_type,
            report_data.content_id,
            report_data.reason,
            details=report_data.details,
            severity=report_data.severity,
        )
    except ModerationError as err:
        raise_http(err)


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: int,
    actor: ActorDep,
    pipeline: ReportPipelineDep,
    db: SessionDep,
) -> Report:
    """Return a report to its filer or to a moderator."""
    try:
        report = pipeline.get(db, report_id)
    except ModerationError as err:
        raise_http(err)
    if report.reported_by_id != actor.id and not actor.is_moderation_actor:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to view this report",
        )
    return report
