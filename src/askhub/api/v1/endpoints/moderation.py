"""Moderation endpoints: reports, reviews and account actions."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Query, status
from sqlalchemy import select

from askhub.api.v1.dependencies import ActiveUserDep, AdminUserDep, DispatcherDep, SessionDep
from askhub.core.errors import NotFoundError
from askhub.core.settings import settings
from askhub.models import UserModeration
from askhub.schemas.common import Page
from askhub.schemas.moderation import (
    BanCreate,
    DashboardResponse,
    ModerationStatusResponse,
    ReportCreate,
    ReportResponse,
    ReportReview,
    SuspensionCreate,
    WarningCreate,
)
from askhub.services.moderation import (
    ban_user,
    list_reports,
    review_report,
    submit_report,
    suspend_user,
    warn_user,
)
from askhub.services.reconciliation import reconcile_answer_votes
from askhub.services.stats import admin_dashboard

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.post("/reports", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
def create_report(
    report_data: ReportCreate,
    current_user: ActiveUserDep,
    db: SessionDep,
) -> ReportResponse:
    """Report a question or answer for admin review."""
    report = submit_report(
        db,
        report_data.report_type,
        report_data.target_id,
        current_user.id,
        report_data.reason,
        report_data.description,
    )
    return ReportResponse.model_validate(report)


@router.get("/reports", response_model=Page[ReportResponse])
def get_reports(
    admin: AdminUserDep,
    db: SessionDep,
    report_status: str = Query("pending", alias="status"),
    limit: int = Query(settings.default_page_size, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> Page[ReportResponse]:
    """List reports, newest first. Pass ``status=all`` to include reviewed ones."""
    reports, total = list_reports(db, report_status, limit=limit, offset=offset)
    return Page[ReportResponse](
        items=[ReportResponse.model_validate(report) for report in reports],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.patch("/reports/{report_id}/review", response_model=ReportResponse)
def review(
    report_id: int,
    review_data: ReportReview,
    admin: AdminUserDep,
    db: SessionDep,
    dispatcher: DispatcherDep,
    background_tasks: BackgroundTasks,
) -> ReportResponse:
    """Resolve a pending report: dismiss it, delete the content or ban the owner."""
    outcome = review_report(db, report_id, admin.id, review_data.action)
    if outcome.events:
        background_tasks.add_task(dispatcher.dispatch, outcome.events)
    return ReportResponse.model_validate(outcome.report)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(admin: AdminUserDep, db: SessionDep) -> DashboardResponse:
    """Report counts and the most recent pending reports."""
    return DashboardResponse.model_validate(admin_dashboard(db))


@router.post("/reconcile")
def reconcile_votes(admin: AdminUserDep, db: SessionDep) -> dict[str, Any]:
    """Recompute answer tallies from the vote ledger."""
    return reconcile_answer_votes(db)


@router.get("/users/{user_id}", response_model=ModerationStatusResponse)
def get_user_moderation(
    user_id: int,
    admin: AdminUserDep,
    db: SessionDep,
) -> ModerationStatusResponse:
    """Get a user's moderation record."""
    record = db.scalars(select(UserModeration).where(UserModeration.user_id == user_id)).first()
    if record is None:
        raise NotFoundError("No moderation record for this user")
    return ModerationStatusResponse.model_validate(record)


@router.post("/users/{user_id}/warn", response_model=ModerationStatusResponse)
def warn(
    user_id: int,
    warning_data: WarningCreate,
    admin: AdminUserDep,
    db: SessionDep,
) -> ModerationStatusResponse:
    record = warn_user(db, user_id, admin.id, warning_data.reason, warning_data.description)
    return ModerationStatusResponse.model_validate(record)


@router.post("/users/{user_id}/suspend", response_model=ModerationStatusResponse)
def suspend(
    user_id: int,
    suspension_data: SuspensionCreate,
    admin: AdminUserDep,
    db: SessionDep,
) -> ModerationStatusResponse:
    record = suspend_user(
        db,
        user_id,
        admin.id,
        suspension_data.reason,
        suspension_data.duration_days,
    )
    return ModerationStatusResponse.model_validate(record)


@router.post("/users/{user_id}/ban", response_model=ModerationStatusResponse)
def ban(
    user_id: int,
    ban_data: BanCreate,
    admin: AdminUserDep,
    db: SessionDep,
) -> ModerationStatusResponse:
    record = ban_user(db, user_id, admin.id, ban_data.reason)
    return ModerationStatusResponse.model_validate(record)
