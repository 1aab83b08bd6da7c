"""Tests for question and answer submission, editing and removal."""

import pytest
from sqlalchemy import select

from askhub.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from askhub.models import Answer, AnswerVote, Question, Report
from askhub.services.content import (
    delete_answer,
    delete_question,
    get_question,
    submit_answer,
    submit_question,
    update_answer,
    update_question,
)
from askhub.services.events import AnswerPosted
from askhub.services.votes import cast_vote


def test_submit_question_trims_fields(db_session, test_user) -> None:
    question = submit_question(
        db_session, test_user.id, "  Title  ", " Body ", [" python ", "", "sql"]
    )

    assert question.title == "Title"
    assert question.description == "Body"
    assert question.tags == ["python", "sql"]


@pytest.mark.parametrize(
    ("title", "description", "tags"),
    [
        ("", "body", ["a"]),
        ("title", "   ", ["a"]),
        ("title", "body", []),
        ("title", "body", ["  "]),
        ("title", "body", ["a", "b", "c", "d", "e", "f"]),
    ],
)
def test_submit_question_validation(db_session, test_user, title, description, tags) -> None:
    with pytest.raises(InvalidArgumentError):
        submit_question(db_session, test_user.id, title, description, tags)


def test_spammy_question_is_auto_flagged(db_session, test_user) -> None:
    question = submit_question(
        db_session,
        test_user.id,
        "BUY NOW CLICK HERE",
        "http://a http://b http://c http://d",
        ["deals"],
    )

    report = db_session.scalars(select(Report)).one()
    assert report.target_id == question.id
    assert report.report_type == "question"
    assert report.auto_flagged is True
    assert report.content_owner == test_user.id


def test_submit_answer_emits_event(db_session, test_question, test_user, other_user) -> None:
    submission = submit_answer(db_session, test_question.id, other_user.id, "Try pathlib.")

    assert submission.answer.body == "Try pathlib."
    assert submission.answer.votes == 0
    event = submission.events[0]
    assert isinstance(event, AnswerPosted)
    assert event.question_owner_id == test_user.id


def test_answering_own_question_emits_nothing(db_session, test_question, test_user) -> None:
    assert submit_answer(db_session, test_question.id, test_user.id, "Never mind.").events == []


def test_submit_answer_unknown_question(db_session, other_user) -> None:
    with pytest.raises(NotFoundError):
        submit_answer(db_session, 5150, other_user.id, "hello")


def test_delete_question_cascades(db_session, test_question, test_answer, test_user) -> None:
    cast_vote(db_session, test_answer.id, test_user.id, 1)
    question_id, answer_id = test_question.id, test_answer.id

    delete_question(db_session, question_id, test_user.id)

    db_session.expire_all()
    assert db_session.get(Question, question_id) is None
    assert db_session.get(Answer, answer_id) is None
    assert db_session.scalars(select(AnswerVote)).all() == []


def test_delete_requires_owner(db_session, test_question, test_answer, test_user, other_user) -> None:
    with pytest.raises(ForbiddenError):
        delete_question(db_session, test_question.id, other_user.id)
    with pytest.raises(ForbiddenError):
        delete_answer(db_session, test_answer.id, test_user.id)


def test_delete_answer_removes_votes(db_session, test_answer, test_user, other_user) -> None:
    cast_vote(db_session, test_answer.id, test_user.id, -1)
    answer_id = test_answer.id

    delete_answer(db_session, answer_id, other_user.id)

    db_session.expire_all()
    assert db_session.get(Answer, answer_id) is None
    assert db_session.scalars(select(AnswerVote)).all() == []


def test_update_question_replaces_fields(db_session, test_question, test_user) -> None:
    question = update_question(
        db_session, test_question.id, test_user.id, " New title ", " New body ", ["sql", " "]
    )

    assert question.title == "New title"
    assert question.description == "New body"
    assert question.tags == ["sql"]


def test_update_question_checks_owner_before_input(
    db_session, test_question, other_user
) -> None:
    with pytest.raises(ForbiddenError):
        update_question(db_session, test_question.id, other_user.id, "", "", [])


@pytest.mark.parametrize(
    ("title", "description", "tags"),
    [("  ", "body", ["a"]), ("title", "", ["a"]), ("title", "body", [" "])],
)
def test_update_question_validation_keeps_original(
    db_session, test_question, test_user, title, description, tags
) -> None:
    with pytest.raises(InvalidArgumentError):
        update_question(db_session, test_question.id, test_user.id, title, description, tags)

    db_session.expire_all()
    assert db_session.get(Question, test_question.id).title == "How do I read a file in Python?"


def test_update_missing_question(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        update_question(db_session, 404, test_user.id, "t", "d", ["a"])


def test_update_answer(db_session, test_answer, test_user, other_user) -> None:
    with pytest.raises(ForbiddenError):
        update_answer(db_session, test_answer.id, test_user.id, "hijacked")
    with pytest.raises(InvalidArgumentError):
        update_answer(db_session, test_answer.id, other_user.id, "   ")
    with pytest.raises(NotFoundError):
        update_answer(db_session, 404, other_user.id, "body")

    answer = update_answer(db_session, test_answer.id, other_user.id, "  Use pathlib.  ")

    assert answer.body == "Use pathlib."


def test_get_question_counts_views(db_session, test_question) -> None:
    assert get_question(db_session, test_question.id).views == 1
    assert get_question(db_session, test_question.id).views == 2

    with pytest.raises(NotFoundError):
        get_question(db_session, 404)
