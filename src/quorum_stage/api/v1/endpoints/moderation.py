"""Moderation endpoints for the Quorum API."""

from __future__ import annotations

from fastapi import APIRouter, Query

from quorum_stage.api.v1.dependencies import (
    CoordinatorDep,
    ModeratorDep,
    ReportPipelineDep,
    SessionDep,
    raise_http,
)
from quorum_stage.models import Report
from quorum_stage.models.enums import ContentKind, ReportStatus
from quorum_stage.schemas.moderation import (
    ContentDeletionResponse,
    ModerationDecision,
    ModerationOutcomeResponse,
)
from quorum_stage.schemas.report import ReportResponse
from quorum_stage.services.errors import ModerationError

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/reports", response_model=list[ReportResponse])
async def list_reports(
    _moderator: ModeratorDep,
    pipeline: ReportPipelineDep,
    db: SessionDep,
    report_status: ReportStatus | None = Query(ReportStatus.PENDING, alias="status"),
    content_type: ContentKind | None = Query(None),
    limit: int = Query(50, ge=1, le=100),
) -> list[Report]:
    """List reports, pending ones by default, newest first."""
    return pipeline.list_reports(db, status=report_status, kind=content_type, limit=limit)


@router.put("/reports/{report_id}", response_model=ReportResponse)
async def resolve_report(
    report_id: int,
    decision: ModerationDecision,
    moderator: ModeratorDep,
    coordinator: CoordinatorDep,
    db: SessionDep,
) -> Report:
    """Decide a pending report.

    The decision is applied to the reported item and closes every other
    pending report against it.
    """
    try:
        return coordinator.resolve_report(
            db, report_id, moderator, decision.action, decision.note
        )
    except ModerationError as err:
        raise_http(err)


@router.post("/{content_type}/{content_id}/actions", response_model=ModerationOutcomeResponse)
async def moderate_content(
    content_type: ContentKind,
    content_id: int,
    decision: ModerationDecision,
    moderator: ModeratorDep,
    coordinator: CoordinatorDep,
    db: SessionDep,
) -> ModerationOutcomeResponse:
    try:
        outcome = coordinator.moderate_content(
            db, content_type, content_id, moderator, decision.action, decision.note
        )
    except ModerationError as err:
        raise_http(err)
    return ModerationOutcomeResponse(
        content_type=outcome.kind,
        content_id=outcome.content_id,
        action=outcome.action,
        status=outcome.content.status.value if outcome.content is not None else None,
        reports_closed=outcome.reports_closed,
        deleted=outcome.deleted,
    )


@router.delete("/{content_type}/{content_id}", response_model=ContentDeletionResponse)
async def delete_content(
    content_type: ContentKind,
    content_id: int,
    moderator: ModeratorDep,
    coordinator: CoordinatorDep,
    db: SessionDep,
    note: str | None = Query(None, max_length=2000),
) -> ContentDeletionResponse:
    """Hard-delete an item together with its answers and votes."""
    try:
        counts = coordinator.delete_content(db, content_type, content_id, moderator, note)
    except ModerationError as err:
        raise_http(err)
    return ContentDeletionResponse(
        content_type=content_type, content_id=content_id, deleted=counts
    )


@router.get("/{content_type}/{content_id}/history", response_model=list[ReportResponse])
async def get_report_history(
    content_type: ContentKind,
    content_id: int,
    _moderator: ModeratorDep,
    pipeline: ReportPipelineDep,
    db: SessionDep,
) -> list[Report]:
    """Every report ever filed against an item, newest first."""
    return pipeline.history(db, content_type, content_id)
