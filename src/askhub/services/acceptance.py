"""Answer acceptance: at most one accepted answer per question."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from askhub.core.errors import ForbiddenError, NotFoundError
from askhub.db.session import atomic
from askhub.models import Answer, Question
from askhub.services.events import AnswerAccepted, DomainEvent

__all__ = ["AcceptOutcome", "accept_answer", "accepted_answer_ids"]


@dataclass
class AcceptOutcome:
    answer: Answer
    changed: bool
    events: list[DomainEvent] = field(default_factory=list)


def accept_answer(session: Session, answer_id: int, requester_id: int) -> AcceptOutcome:
    """Mark ``answer_id`` as the accepted answer of its question.

    The parent question row is locked while the previous acceptance is
    cleared and the new one set, so concurrent accepts on one question
    serialize and no reader sees two accepted answers. Accepting the
    already-accepted answer changes nothing and emits no event.

    Raises:
        NotFoundError: If the answer does not exist.
        ForbiddenError: If the requester does not own the question.
    """
    with atomic(session):
        answer = session.get(Answer, answer_id)
        if answer is None:
            raise NotFoundError("Answer not found")

        question = session.scalars(
            select(Question).where(Question.id == answer.question_id).with_for_update()
        ).first()
        if question is None:
            raise NotFoundError("Question not found")
        if question.owner_id != requester_id:
            raise ForbiddenError("Only the question owner can accept answers")

        # Re-read under the lock; another request may have just accepted it.
        session.refresh(answer, ["is_accepted"])
        if answer.is_accepted:
            return AcceptOutcome(answer=answer, changed=False)

        session.execute(
            update(Answer)
            .where(
                Answer.question_id == question.id,
                Answer.id != answer_id,
                Answer.is_accepted.is_(True),
            )
            .values(is_accepted=False)
            .execution_options(synchronize_session="fetch")
        )
        answer.is_accepted = True

        event = AnswerAccepted(
            actor_id=requester_id,
            question_id=question.id,
            question_title=question.title,
            answer_id=answer.id,
            answer_owner_id=answer.owner_id,
        )

    events: list[DomainEvent] = []
    if event.answer_owner_id != requester_id:
        events.append(event)
    return AcceptOutcome(answer=answer, changed=True, events=events)


def accepted_answer_ids(session: Session, question_id: int) -> list[int]:
    """Return the ids of accepted answers for a question (zero or one)."""
    return list(
        session.scalars(
            select(Answer.id).where(
                Answer.question_id == question_id,
                Answer.is_accepted.is_(True),
            )
        )
    )
