"""Tests for the answer acceptance protocol."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy import select

from askhub.core.errors import ForbiddenError, NotFoundError
from askhub.models import Answer, Question, User
from askhub.services.acceptance import accept_answer, accepted_answer_ids
from askhub.services.events import AnswerAccepted


def test_accept_marks_answer(db_session, test_answer, test_user, test_question) -> None:
    outcome = accept_answer(db_session, test_answer.id, test_user.id)

    assert outcome.changed is True
    assert outcome.answer.is_accepted is True
    assert accepted_answer_ids(db_session, test_question.id) == [test_answer.id]


def test_accepting_second_answer_moves_acceptance(
    db_session, make_answer, other_user, make_user, test_user, test_question
) -> None:
    first = make_answer(other_user)
    second = make_answer(make_user())

    accept_answer(db_session, first.id, test_user.id)
    accept_answer(db_session, second.id, test_user.id)

    db_session.expire_all()
    assert db_session.get(Answer, first.id).is_accepted is False
    assert db_session.get(Answer, second.id).is_accepted is True
    assert accepted_answer_ids(db_session, test_question.id) == [second.id]


def test_only_question_owner_can_accept(db_session, test_answer, other_user) -> None:
    with pytest.raises(ForbiddenError):
        accept_answer(db_session, test_answer.id, other_user.id)

    db_session.expire_all()
    assert db_session.get(Answer, test_answer.id).is_accepted is False


def test_unknown_answer(db_session, test_user) -> None:
    with pytest.raises(NotFoundError):
        accept_answer(db_session, 4242, test_user.id)


def test_accept_is_idempotent(db_session, test_answer, test_user) -> None:
    first = accept_answer(db_session, test_answer.id, test_user.id)
    second = accept_answer(db_session, test_answer.id, test_user.id)

    assert len(first.events) == 1
    assert second.changed is False
    assert second.events == []
    assert second.answer.is_accepted is True


def test_event_targets_answer_owner(db_session, test_answer, test_user, other_user) -> None:
    outcome = accept_answer(db_session, test_answer.id, test_user.id)

    event = outcome.events[0]
    assert isinstance(event, AnswerAccepted)
    assert event.answer_owner_id == other_user.id
    assert event.question_title == "How do I read a file in Python?"


def test_accepting_own_answer_emits_nothing(db_session, make_answer, test_user) -> None:
    own = make_answer(test_user)

    outcome = accept_answer(db_session, own.id, test_user.id)

    assert outcome.changed is True
    assert outcome.events == []


def test_concurrent_accepts_leave_one_accepted(file_session_factory) -> None:
    with file_session_factory() as session:
        owner = User(name="owner", email="owner@example.com")
        helper = User(name="helper", email="helper@example.com")
        session.add_all([owner, helper])
        session.flush()
        question = Question(owner_id=owner.id, title="t", description="d", tags=["x"])
        session.add(question)
        session.flush()
        answers = [
            Answer(question_id=question.id, owner_id=helper.id, body=f"answer {i}")
            for i in range(6)
        ]
        session.add_all(answers)
        session.commit()
        owner_id, question_id = owner.id, question.id
        answer_ids = [answer.id for answer in answers]

    def accept(answer_id: int) -> None:
        with file_session_factory() as session:
            accept_answer(session, answer_id, owner_id)

    with ThreadPoolExecutor(max_workers=6) as pool:
        for future in [pool.submit(accept, answer_id) for answer_id in answer_ids * 3]:
            future.result()

    with file_session_factory() as session:
        accepted = session.scalars(
            select(Answer.id).where(
                Answer.question_id == question_id, Answer.is_accepted.is_(True)
            )
        ).all()
    assert len(accepted) == 1
