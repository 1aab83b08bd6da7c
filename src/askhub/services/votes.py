"""Vote ledger and tally engine for answers."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from askhub.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from askhub.db.session import atomic
from askhub.models import Answer, AnswerVote
from askhub.services.events import AnswerUpvoted, DomainEvent

__all__ = ["VoteAction", "VoteOutcome", "cast_vote", "get_vote_status"]

VALID_VOTE_VALUES = (1, -1)


class VoteAction(enum.StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    REMOVED = "removed"


@dataclass
class VoteOutcome:
    """Result of ``cast_vote``.

    ``value`` is the caller's live vote after the call, or None once removed.
    ``votes`` is the answer's tally after the call.
    """

    action: VoteAction
    value: int | None
    votes: int
    events: list[DomainEvent] = field(default_factory=list)


def _lock_answer(session: Session, answer_id: int) -> Answer:
    answer = session.scalars(
        select(Answer).where(Answer.id == answer_id).with_for_update()
    ).first()
    if answer is None:
        raise NotFoundError("Answer not found")
    return answer


def _apply_vote(
    session: Session,
    answer_id: int,
    user_id: int,
    value: int,
) -> tuple[VoteAction, int | None, int]:
    """Mutate the ledger and return (action, live value, counter delta)."""
    existing = session.get(AnswerVote, (answer_id, user_id))

    if existing is None:
        session.add(AnswerVote(answer_id=answer_id, user_id=user_id, value=value))
        return VoteAction.CREATED, value, value

    if existing.value == value:
        # Same direction again toggles the vote off.
        session.delete(existing)
        return VoteAction.REMOVED, None, -value

    old_value = existing.value
    existing.value = value
    return VoteAction.UPDATED, value, value - old_value


def cast_vote(session: Session, answer_id: int, user_id: int, value: int) -> VoteOutcome:
    """Cast, flip or withdraw ``user_id``'s vote on an answer.

    The ledger change and the tally adjustment commit together. The answer
    row is locked for the duration, so concurrent votes on the same answer
    apply one after another.

    Raises:
        InvalidArgumentError: If ``value`` is not 1 or -1.
        NotFoundError: If the answer does not exist.
    """
    # bool is an int subclass; True must not count as an upvote.
    if isinstance(value, bool) or value not in VALID_VOTE_VALUES:
        raise InvalidArgumentError("Vote value must be 1 (upvote) or -1 (downvote)")

    try:
        with atomic(session):
            answer = _lock_answer(session, answer_id)
            owner_id = answer.owner_id
            question_id = answer.question_id

            action, live_value, delta = _apply_vote(session, answer_id, user_id, value)
            session.flush()
            session.execute(
                update(Answer)
                .where(Answer.id == answer_id)
                .values(votes=Answer.votes + delta)
                .execution_options(synchronize_session=False)
            )
            tally = session.scalar(select(Answer.votes).where(Answer.id == answer_id))
    except IntegrityError as err:
        raise ConflictError("Vote was modified concurrently; retry the request") from err

    session.expire(answer, ["votes"])

    events: list[DomainEvent] = []
    if action is VoteAction.CREATED and value == 1 and user_id != owner_id:
        events.append(
            AnswerUpvoted(
                actor_id=user_id,
                question_id=question_id,
                answer_id=answer_id,
                answer_owner_id=owner_id,
            )
        )
    return VoteOutcome(action=action, value=live_value, votes=int(tally or 0), events=events)


def get_vote_status(session: Session, answer_id: int, user_id: int) -> tuple[bool, int | None]:
    """Return whether the user has voted on the answer and with which value."""
    vote = session.get(AnswerVote, (answer_id, user_id))
    if vote is None:
        return False, None
    return True, vote.value
