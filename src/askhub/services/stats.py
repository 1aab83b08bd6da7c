"""Read-only aggregates: trending questions, user stats and the admin dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from askhub.core.settings import settings
from askhub.db.time import utcnow
from askhub.models import Answer, AnswerVote, Question, Report, ReportStatus

RECENT_REPORTS_LIMIT = 10

# Reputation weights
UPVOTE_POINTS = 10
ACCEPTED_POINTS = 25
QUESTION_POINTS = 5


@dataclass
class TrendingQuestion:
    question: Question
    answer_count: int


@dataclass
class UserStats:
    questions_count: int
    answers_count: int
    total_upvotes: int
    accepted_answers: int
    reputation: int


@dataclass
class DashboardOverview:
    pending_reports: int
    total_reports: int
    recent_reports: list[Report]


def trending_questions(
    session: Session,
    days: int | None = None,
    limit: int | None = None,
    now: datetime | None = None,
) -> list[TrendingQuestion]:
    """Return recent questions with the most answers first."""
    days = settings.trending_window_days if days is None else days
    limit = settings.trending_limit if limit is None else limit
    since = (now or utcnow()) - timedelta(days=days)

    answer_count = func.count(Answer.id).label("answer_count")
    rows = session.execute(
        select(Question, answer_count)
        .outerjoin(Answer, Answer.question_id == Question.id)
        .where(Question.created_at >= since)
        .group_by(Question.id)
        .order_by(answer_count.desc(), Question.created_at.desc(), Question.id.desc())
        .limit(limit)
    ).all()
    return [TrendingQuestion(question=question, answer_count=count) for question, count in rows]


def _count(session: Session, statement) -> int:
    return int(session.scalar(statement) or 0)


def user_stats(session: Session, user_id: int) -> UserStats:
    """Activity counters and reputation for one user."""
    questions_count = _count(
        session,
        select(func.count()).select_from(Question).where(Question.owner_id == user_id),
    )
    answers_count = _count(
        session,
        select(func.count()).select_from(Answer).where(Answer.owner_id == user_id),
    )
    total_upvotes = _count(
        session,
        select(func.count())
        .select_from(AnswerVote)
        .join(Answer, Answer.id == AnswerVote.answer_id)
        .where(Answer.owner_id == user_id, AnswerVote.value == 1),
    )
    accepted_answers = _count(
        session,
        select(func.count())
        .select_from(Answer)
        .where(Answer.owner_id == user_id, Answer.is_accepted.is_(True)),
    )
    reputation = (
        total_upvotes * UPVOTE_POINTS
        + accepted_answers * ACCEPTED_POINTS
        + questions_count * QUESTION_POINTS
    )
    return UserStats(
        questions_count=questions_count,
        answers_count=answers_count,
        total_upvotes=total_upvotes,
        accepted_answers=accepted_answers,
        reputation=reputation,
    )


def admin_dashboard(session: Session) -> DashboardOverview:
    pending = _count(
        session,
        select(func.count()).select_from(Report).where(Report.status == ReportStatus.PENDING.value),
    )
    total = _count(session, select(func.count()).select_from(Report))
    recent = session.scalars(
        select(Report)
        .where(Report.status == ReportStatus.PENDING.value)
        .order_by(Report.created_at.desc(), Report.id.desc())
        .limit(RECENT_REPORTS_LIMIT)
    ).all()
    return DashboardOverview(
        pending_reports=pending,
        total_reports=total,
        recent_reports=list(recent),
    )
