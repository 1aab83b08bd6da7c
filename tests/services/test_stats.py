"""Tests for trending questions, user stats and the admin dashboard."""

from datetime import timedelta

from askhub.db.time import utcnow
from askhub.models import Answer, Question
from askhub.services.acceptance import accept_answer
from askhub.services.moderation import review_report, submit_report
from askhub.services.stats import admin_dashboard, trending_questions, user_stats
from askhub.services.votes import cast_vote


def _question(session, owner, title, *, age_days=0, answers=0):
    question = Question(
        owner_id=owner.id,
        title=title,
        description="details",
        tags=["misc"],
        created_at=utcnow() - timedelta(days=age_days),
    )
    session.add(question)
    session.flush()
    for i in range(answers):
        session.add(Answer(question_id=question.id, owner_id=owner.id, body=f"answer {i}"))
    session.commit()
    return question


def test_trending_orders_by_answers_within_window(db_session, test_user) -> None:
    _question(db_session, test_user, "quiet", answers=0)
    _question(db_session, test_user, "busy", age_days=1, answers=3)
    _question(db_session, test_user, "warm", answers=1)
    _question(db_session, test_user, "stale", age_days=30, answers=9)

    trending = trending_questions(db_session)

    assert [item.question.title for item in trending] == ["busy", "warm", "quiet"]
    assert [item.answer_count for item in trending] == [3, 1, 0]


def test_trending_respects_limit_and_ties(db_session, test_user) -> None:
    _question(db_session, test_user, "older", age_days=2, answers=1)
    _question(db_session, test_user, "newer", age_days=1, answers=1)
    _question(db_session, test_user, "extra", age_days=3)

    trending = trending_questions(db_session, limit=2)

    assert [item.question.title for item in trending] == ["newer", "older"]


def test_user_stats_reputation(
    db_session, test_user, other_user, make_user, make_answer, test_question
) -> None:
    first = make_answer(other_user)
    make_answer(other_user)
    fans = [make_user() for _ in range(2)]
    for fan in fans:
        cast_vote(db_session, first.id, fan.id, 1)
    cast_vote(db_session, first.id, test_user.id, -1)
    accept_answer(db_session, first.id, test_user.id)

    stats = user_stats(db_session, other_user.id)

    assert stats.questions_count == 0
    assert stats.answers_count == 2
    assert stats.total_upvotes == 2
    assert stats.accepted_answers == 1
    assert stats.reputation == 2 * 10 + 25

    asker = user_stats(db_session, test_user.id)
    assert asker.questions_count == 1
    assert asker.reputation == 5


def test_admin_dashboard_counts(
    db_session, test_question, test_answer, test_user, other_user, admin_user
) -> None:
    first = submit_report(db_session, "question", test_question.id, other_user.id, "spam")
    submit_report(db_session, "answer", test_answer.id, test_user.id, "other")
    review_report(db_session, first.id, admin_user.id, "dismissed")

    overview = admin_dashboard(db_session)

    assert overview.pending_reports == 1
    assert overview.total_reports == 2
    assert [report.report_type for report in overview.recent_reports] == ["answer"]
