# src/askhub/models/question.py
"""SQLAlchemy models for questions and their answers."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from askhub.db.session import Base
from askhub.db.time import utcnow

if TYPE_CHECKING:
    from askhub.models.vote import AnswerVote


class Question(Base):
    """A question owned by its author.

    Deleting a question removes its answers and, through them, their votes.
    """

    __tablename__ = "question"
    __table_args__ = (Index("ix_question_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    views: Mapped[int] = mapped_column(default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    answers: Mapped[list[Answer]] = relationship(
        "Answer",
        back_populates="question",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Answer(Base):
    """An answer to exactly one question.

    ``votes`` is a denormalized tally; the vote ledger is authoritative.
    At most one answer per question has ``is_accepted`` set.
    """

    __tablename__ = "answer"
    __table_args__ = (Index("ix_answer_question_id_is_accepted", "question_id", "is_accepted"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    question_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("question.id", ondelete="CASCADE"),
        nullable=False,
    )
    owner_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    body: Mapped[str] = mapped_column(Text, nullable=False)
    votes: Mapped[int] = mapped_column(default=0, nullable=False)
    is_accepted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    question: Mapped[Question] = relationship("Question", back_populates="answers")
    vote_rows: Mapped[list[AnswerVote]] = relationship(
        "AnswerVote",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
