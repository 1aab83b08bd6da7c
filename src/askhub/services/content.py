"""Question and answer submission, editing and removal."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from sqlalchemy import update
from sqlalchemy.orm import Session

from askhub.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError
from askhub.core.settings import settings
from askhub.db.session import atomic
from askhub.models import Answer, Question, ReportType
from askhub.services.auto_moderation import auto_flag_content
from askhub.services.events import AnswerPosted, DomainEvent

logger = logging.getLogger(__name__)


@dataclass
class AnswerSubmission:
    answer: Answer
    events: list[DomainEvent] = field(default_factory=list)


def _required(value: str | None, label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise InvalidArgumentError(f"{label} is required")
    return text


def _clean_tags(tags: Sequence[str] | None) -> list[str]:
    cleaned = [tag.strip() for tag in tags or [] if tag and tag.strip()]
    if not cleaned:
        raise InvalidArgumentError("At least one tag is required")
    if len(cleaned) > settings.max_tags_per_question:
        raise InvalidArgumentError(
            f"A question can have at most {settings.max_tags_per_question} tags"
        )
    return cleaned


def submit_question(
    session: Session,
    owner_id: int,
    title: str,
    description: str,
    tags: Sequence[str],
) -> Question:
    """Create a question and pre-screen its text."""
    title = _required(title, "Title")
    description = _required(description, "Description")
    clean_tags = _clean_tags(tags)

    with atomic(session):
        question = Question(
            owner_id=owner_id,
            title=title,
            description=description,
            tags=clean_tags,
        )
        session.add(question)
        session.flush()
        auto_flag_content(
            session,
            ReportType.QUESTION,
            question.id,
            f"{title} {description}",
            owner_id,
        )
    return question


def submit_answer(session: Session, question_id: int, owner_id: int, body: str) -> AnswerSubmission:
    """Post an answer; the question owner is told about it after commit."""
    body = _required(body, "Answer body")

    with atomic(session):
        question = session.get(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")

        answer = Answer(question_id=question_id, owner_id=owner_id, body=body)
        session.add(answer)
        session.flush()
        auto_flag_content(session, ReportType.ANSWER, answer.id, body, owner_id)

        event = AnswerPosted(
            actor_id=owner_id,
            question_id=question.id,
            question_title=question.title,
            question_owner_id=question.owner_id,
            answer_id=answer.id,
        )

    events: list[DomainEvent] = []
    if event.question_owner_id != owner_id:
        events.append(event)
    return AnswerSubmission(answer=answer, events=events)


def delete_question(session: Session, question_id: int, requester_id: int) -> None:
    """Delete a question with its answers and their votes."""
    with atomic(session):
        question = session.get(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")
        if question.owner_id != requester_id:
            raise ForbiddenError("Not authorized to delete this question")
        session.delete(question)
    logger.info("Question %s deleted by owner %s", question_id, requester_id)


def delete_answer(session: Session, answer_id: int, requester_id: int) -> None:
    """Delete an answer with its votes."""
    with atomic(session):
        answer = session.get(Answer, answer_id)
        if answer is None:
            raise NotFoundError("Answer not found")
        if answer.owner_id != requester_id:
            raise ForbiddenError("Not authorized to delete this answer")
        session.delete(answer)
    logger.info("Answer %s deleted by owner %s", answer_id, requester_id)


def update_question(
    session: Session,
    question_id: int,
    requester_id: int,
    title: str,
    description: str,
    tags: Sequence[str],
) -> Question:
    """Replace the text and tags of one of the caller's questions."""
    with atomic(session):
        question = session.get(Question, question_id)
        if question is None:
            raise NotFoundError("Question not found")
        if question.owner_id != requester_id:
            raise ForbiddenError("You can only edit your own questions")

        question.title = _required(title, "Title")
        question.description = _required(description, "Description")
        question.tags = _clean_tags(tags)
    return question


def update_answer(session: Session, answer_id: int, requester_id: int, body: str) -> Answer:
    """Replace the body of one of the caller's answers."""
    body = _required(body, "Answer body")

    with atomic(session):
        answer = session.get(Answer, answer_id)
        if answer is None:
            raise NotFoundError("Answer not found")
        if answer.owner_id != requester_id:
            raise ForbiddenError("You can only edit your own answers")
        answer.body = body
    return answer


def get_question(session: Session, question_id: int) -> Question:
    """Fetch a question for display and count the view."""
    with atomic(session):
        result = session.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(views=Question.views + 1)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            raise NotFoundError("Question not found")
    return session.get(Question, question_id)
