"""Moderation services: reports, reviews and account standing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from askhub.core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidArgumentError,
    NotFoundError,
)
from askhub.db.session import atomic
from askhub.db.time import as_utc, utcnow
from askhub.models import (
    AdminAction,
    Answer,
    ModerationStatus,
    ModerationWarning,
    Question,
    Report,
    ReportReason,
    ReportStatus,
    ReportType,
    Suspension,
    User,
    UserModeration,
)
from askhub.models.moderation import MODERATION_TRANSITIONS, REPORT_TRANSITIONS
from askhub.services.events import DomainEvent, ReportReviewed

logger = logging.getLogger(__name__)

MAX_DESCRIPTION_LENGTH = 500


@dataclass
class ReviewOutcome:
    report: Report
    events: list[DomainEvent] = field(default_factory=list)


def _parse(enum_cls: type, value: object, label: str):
    try:
        return enum_cls(value)
    except ValueError as err:
        raise InvalidArgumentError(f"Invalid {label}: {value}") from err


def _transition_report(report: Report, target: ReportStatus) -> None:
    current = ReportStatus(report.status)
    if target not in REPORT_TRANSITIONS[current]:
        raise ConflictError("Report already reviewed", {"status": current.value})
    report.status = target.value


def _transition_user(record: UserModeration, target: ModerationStatus) -> None:
    current = ModerationStatus(record.status)
    if target not in MODERATION_TRANSITIONS[current]:
        raise ConflictError(
            f"Cannot move account from {current.value} to {target.value}",
            {"status": current.value},
        )
    record.status = target.value


def _get_user_or_404(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def _require_admin(session: Session, admin_id: int) -> User:
    admin = _get_user_or_404(session, admin_id)
    if not admin.is_admin:
        raise ForbiddenError("Access denied. Insufficient permissions")
    return admin


def get_or_create_moderation(session: Session, user_id: int) -> UserModeration:
    """Return the user's moderation record, adding a fresh one if missing.

    The caller owns the transaction.
    """
    record = session.scalars(
        select(UserModeration).where(UserModeration.user_id == user_id).with_for_update()
    ).first()
    if record is None:
        record = UserModeration(
            user_id=user_id,
            status=ModerationStatus.ACTIVE.value,
            trust_score=50,
            total_reports=0,
            valid_reports=0,
            content_removed=0,
        )
        session.add(record)
        session.flush()
    return record


def _resolve_target_owner(session: Session, report_type: ReportType, target_id: int) -> int:
    if report_type is ReportType.QUESTION:
        question = session.get(Question, target_id)
        if question is None:
            raise NotFoundError("Question not found")
        return question.owner_id

    answer = session.get(Answer, target_id)
    if answer is None:
        raise NotFoundError("Answer not found")
    return answer.owner_id


def submit_report(
    session: Session,
    report_type: ReportType | str,
    target_id: int,
    reporter_id: int,
    reason: ReportReason | str,
    description: str | None = None,
) -> Report:
    """File a pending report against a question or answer.

    Raises:
        InvalidArgumentError: Unknown type or reason, or description too long.
        NotFoundError: The target does not exist.
        ConflictError: The reporter already has a pending report on it.
    """
    kind = _parse(ReportType, report_type, "report type")
    reason_value = _parse(ReportReason, reason, "report reason")
    if description is not None:
        description = description.strip() or None
    if description and len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidArgumentError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )

    try:
        with atomic(session):
            content_owner = _resolve_target_owner(session, kind, target_id)

            existing = session.scalars(
                select(Report).where(
                    Report.report_type == kind.value,
                    Report.target_id == target_id,
                    Report.reported_by == reporter_id,
                    Report.status == ReportStatus.PENDING.value,
                )
            ).first()
            if existing is not None:
                raise ConflictError("You have already reported this content")

            report = Report(
                report_type=kind.value,
                target_id=target_id,
                reported_by=reporter_id,
                content_owner=content_owner,
                reason=reason_value.value,
                description=description,
                status=ReportStatus.PENDING.value,
            )
            session.add(report)

            record = get_or_create_moderation(session, content_owner)
            record.total_reports += 1
            record.last_reported_at = utcnow()
    except IntegrityError as err:
        raise ConflictError("You have already reported this content") from err

    return report


def _delete_target(session: Session, report: Report) -> bool:
    model = Question if report.report_type == ReportType.QUESTION else Answer
    target = session.get(model, report.target_id)
    if target is None:
        logger.info(
            "Report %s targets %s %s which no longer exists",
            report.id,
            report.report_type,
            report.target_id,
        )
        return False
    session.delete(target)
    return True


def _ban(record: UserModeration, admin_id: int, reason: str | None) -> bool:
    if record.status == ModerationStatus.BANNED:
        return False
    _transition_user(record, ModerationStatus.BANNED)
    record.banned_at = utcnow()
    record.banned_by = admin_id
    record.ban_reason = reason
    for suspension in record.suspensions:
        suspension.is_active = False
    return True


def review_report(
    session: Session,
    report_id: int,
    admin_id: int,
    action: AdminAction | str,
) -> ReviewOutcome:
    """Resolve a pending report and carry out the admin's decision.

    The report update and the consequential deletion or ban commit in the
    same transaction; if either fails the report stays pending.

    Raises:
        NotFoundError: The report (or reviewer) does not exist.
        ForbiddenError: The reviewer is not an admin.
        InvalidArgumentError: Unknown action.
        ConflictError: The report is not pending.
    """
    admin_action = _parse(AdminAction, action, "admin action")

    with atomic(session):
        report = session.scalars(
            select(Report).where(Report.id == report_id).with_for_update()
        ).first()
        if report is None:
            raise NotFoundError("Report not found")
        _require_admin(session, admin_id)

        _transition_report(report, ReportStatus.RESOLVED)
        report.reviewed_by = admin_id
        report.reviewed_at = utcnow()
        report.admin_action = admin_action.value

        if admin_action is not AdminAction.DISMISSED:
            record = get_or_create_moderation(session, report.content_owner)
            record.valid_reports += 1
            if admin_action is AdminAction.CONTENT_DELETED:
                if _delete_target(session, report):
                    record.content_removed += 1
            elif _ban(record, admin_id, report.reason):
                logger.info(
                    "User %s banned by %s via report %s",
                    report.content_owner,
                    admin_id,
                    report.id,
                )

        event = ReportReviewed(
            actor_id=admin_id,
            report_id=report.id,
            report_type=report.report_type,
            target_id=report.target_id,
            content_owner_id=report.content_owner,
            action=admin_action.value,
        )

    logger.info("Report %s reviewed by %s: %s", report_id, admin_id, admin_action.value)
    events: list[DomainEvent] = []
    if admin_action is not AdminAction.DISMISSED:
        events.append(event)
    return ReviewOutcome(report=report, events=events)


def check_user_status(
    session: Session,
    user_id: int,
    now: datetime | None = None,
) -> UserModeration | None:
    """Gate privileged actions on the caller's standing.

    Banned accounts are always blocked. Suspended accounts are blocked
    while a suspension is live; once every suspension has lapsed the
    account is flipped back to active here, on access, and allowed through.

    Returns:
        The moderation record, or None if the user never had one.

    Raises:
        ForbiddenError: The account is banned or currently suspended.
    """
    now = now or utcnow()
    with atomic(session):
        record = session.scalars(
            select(UserModeration).where(UserModeration.user_id == user_id)
        ).first()
        if record is None:
            return None

        if record.status == ModerationStatus.BANNED:
            raise ForbiddenError(
                "Your account has been banned",
                {
                    "reason": record.ban_reason,
                    "banned_at": record.banned_at.isoformat() if record.banned_at else None,
                },
            )

        if record.status == ModerationStatus.SUSPENDED:
            live = next(
                (
                    suspension
                    for suspension in record.suspensions
                    if suspension.is_active and now < as_utc(suspension.end_date)
                ),
                None,
            )
            if live is not None:
                raise ForbiddenError(
                    "Your account is currently suspended",
                    {
                        "reason": live.reason,
                        "end_date": as_utc(live.end_date).isoformat(),
                        "duration": live.duration_days,
                    },
                )

            _transition_user(record, ModerationStatus.ACTIVE)
            for suspension in record.suspensions:
                if now >= as_utc(suspension.end_date):
                    suspension.is_active = False
            logger.info("Suspension expired for user %s; account reactivated", user_id)

    return record


def warn_user(
    session: Session,
    user_id: int,
    admin_id: int,
    reason: str,
    description: str | None = None,
) -> UserModeration:
    """Record a warning. A live suspension keeps the account suspended."""
    if not reason or not reason.strip():
        raise InvalidArgumentError("Warning reason is required")

    with atomic(session):
        _require_admin(session, admin_id)
        _get_user_or_404(session, user_id)
        record = get_or_create_moderation(session, user_id)
        if record.status == ModerationStatus.BANNED:
            raise ConflictError("Cannot warn a banned account", {"status": record.status})

        record.warnings.append(
            ModerationWarning(
                reason=reason.strip(),
                description=description,
                issued_by=admin_id,
                issued_at=utcnow(),
            )
        )
        if record.status != ModerationStatus.SUSPENDED:
            _transition_user(record, ModerationStatus.WARNED)

    logger.info("User %s warned by %s: %s", user_id, admin_id, reason)
    return record


def suspend_user(
    session: Session,
    user_id: int,
    admin_id: int,
    reason: str,
    duration_days: int,
    now: datetime | None = None,
) -> UserModeration:
    """Suspend an account for ``duration_days`` starting at ``now``."""
    if duration_days < 1:
        raise InvalidArgumentError("Suspension must last at least one day")
    if not reason or not reason.strip():
        raise InvalidArgumentError("Suspension reason is required")

    start = now or utcnow()
    with atomic(session):
        _require_admin(session, admin_id)
        _get_user_or_404(session, user_id)
        record = get_or_create_moderation(session, user_id)
        _transition_user(record, ModerationStatus.SUSPENDED)
        record.suspensions.append(
            Suspension(
                reason=reason.strip(),
                duration_days=duration_days,
                start_date=start,
                end_date=start + timedelta(days=duration_days),
                issued_by=admin_id,
                is_active=True,
            )
        )

    logger.info("User %s suspended by %s for %d day(s)", user_id, admin_id, duration_days)
    return record


def ban_user(session: Session, user_id: int, admin_id: int, reason: str | None = None) -> UserModeration:
    """Ban an account outright. Banning a banned account changes nothing."""
    with atomic(session):
        _require_admin(session, admin_id)
        _get_user_or_404(session, user_id)
        record = get_or_create_moderation(session, user_id)
        if _ban(record, admin_id, reason):
            logger.info("User %s banned by %s", user_id, admin_id)
    return record


def list_reports(
    session: Session,
    status: str = ReportStatus.PENDING.value,
    *,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Report], int]:
    """Return a page of reports, newest first. ``status="all"`` disables the filter."""
    conditions = []
    if status != "all":
        conditions.append(Report.status == _parse(ReportStatus, status, "report status").value)

    reports = session.scalars(
        select(Report)
        .where(*conditions)
        .order_by(Report.created_at.desc(), Report.id.desc())
        .offset(offset)
        .limit(limit)
    ).all()
    total = session.scalar(select(func.count()).select_from(Report).where(*conditions))
    return list(reports), int(total or 0)
