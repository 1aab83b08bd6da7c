"""Moderation-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ReportCreate(BaseModel):
    """Schema for reporting a question or answer.

    ``report_type`` and ``reason`` are checked by the moderation service so
    unknown values surface as ``invalid_argument``.
    """

    report_type: str = Field(..., description="question or answer")
    target_id: int
    reason: str = Field(..., description="spam, inappropriate, off_topic or other")
    description: str | None = None


class ReportReview(BaseModel):
    """Schema for an admin decision on a pending report."""

    action: str = Field(..., description="dismissed, content_deleted or user_banned")


class ReportResponse(BaseModel):
    """Schema for report information returned by the API."""

    id: int
    report_type: str
    target_id: int
    reported_by: int | None
    content_owner: int
    reason: str
    description: str | None
    status: str
    priority: str
    auto_flagged: bool
    severity_score: int | None
    admin_action: str | None
    reviewed_by: int | None
    reviewed_at: datetime | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DashboardResponse(BaseModel):
    pending_reports: int
    total_reports: int
    recent_reports: list[ReportResponse]

    model_config = ConfigDict(from_attributes=True)


class WarningCreate(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)
    description: str | None = None


class SuspensionCreate(BaseModel):
    reason: str = Field(..., min_length=1, max_length=500)
    duration_days: int = Field(..., description="Whole days, at least one")


class BanCreate(BaseModel):
    reason: str | None = Field(None, max_length=500)


class WarningResponse(BaseModel):
    reason: str
    description: str | None
    issued_by: int | None
    issued_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SuspensionResponse(BaseModel):
    reason: str
    duration_days: int
    start_date: datetime
    end_date: datetime
    issued_by: int | None
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class ModerationStatusResponse(BaseModel):
    """Schema for a user's moderation record."""

    user_id: int
    status: str
    trust_score: int
    total_reports: int
    valid_reports: int
    content_removed: int
    banned_at: datetime | None
    ban_reason: str | None
    warnings: list[WarningResponse]
    suspensions: list[SuspensionResponse]

    model_config = ConfigDict(from_attributes=True)
