"""Domain events emitted by core operations.

Core operations never write notifications themselves. They return these
events, and the notification dispatcher turns them into rows once the
triggering transaction has committed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from askhub.db.time import utcnow

__all__ = [
    "AnswerAccepted",
    "AnswerPosted",
    "AnswerUpvoted",
    "DomainEvent",
    "ReportReviewed",
]


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base envelope; ``occurred_at`` is stamped at emission time."""

    actor_id: int | None
    occurred_at: datetime = field(default_factory=utcnow, kw_only=True)


@dataclass(frozen=True, slots=True)
class AnswerPosted(DomainEvent):
    question_id: int
    question_title: str
    question_owner_id: int
    answer_id: int


@dataclass(frozen=True, slots=True)
class AnswerUpvoted(DomainEvent):
    question_id: int
    answer_id: int
    answer_owner_id: int


@dataclass(frozen=True, slots=True)
class AnswerAccepted(DomainEvent):
    question_id: int
    question_title: str
    answer_id: int
    answer_owner_id: int


@dataclass(frozen=True, slots=True)
class ReportReviewed(DomainEvent):
    report_id: int
    report_type: str
    target_id: int
    content_owner_id: int
    action: str
