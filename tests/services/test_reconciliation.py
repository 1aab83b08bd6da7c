"""Tests for answer tally reconciliation."""

import logging

from sqlalchemy import update

from askhub.models import Answer
from askhub.services.reconciliation import reconcile_answer_votes
from askhub.services.votes import cast_vote


def test_reports_clean_tallies(db_session, test_answer, test_user) -> None:
    cast_vote(db_session, test_answer.id, test_user.id, 1)

    result = reconcile_answer_votes(db_session)

    assert result["checked"] == 1
    assert result["corrected"] == 0
    assert result["corrections"] == []


def test_corrects_drift(db_session, test_answer, test_user, make_user, caplog) -> None:
    cast_vote(db_session, test_answer.id, test_user.id, 1)
    cast_vote(db_session, test_answer.id, make_user().id, 1)
    db_session.execute(update(Answer).where(Answer.id == test_answer.id).values(votes=17))
    db_session.commit()

    with caplog.at_level(logging.WARNING, logger="askhub.services.reconciliation"):
        result = reconcile_answer_votes(db_session)

    assert result["corrected"] == 1
    assert result["corrections"][0] == {
        "answer_id": test_answer.id,
        "stored": 17,
        "actual": 2,
        "diff": -15,
    }
    assert db_session.get(Answer, test_answer.id).votes == 2
    assert "corrected 1/1" in caplog.text


def test_answer_without_votes_resets_to_zero(db_session, test_answer) -> None:
    db_session.execute(update(Answer).where(Answer.id == test_answer.id).values(votes=-3))
    db_session.commit()

    result = reconcile_answer_votes(db_session)

    assert result["corrections"][0]["actual"] == 0
    assert db_session.get(Answer, test_answer.id).votes == 0
