# src/askhub/models/vote.py
"""Models capturing voting interactions on answers."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from askhub.db.session import Base


class AnswerVote(Base):
    """Per-user vote on an answer.

    The live set of rows for an answer always sums to ``Answer.votes``.
    """

    __tablename__ = "answer_vote"
    __table_args__ = (
        CheckConstraint("value IN (1, -1)", name="ck_answer_vote_value"),
        Index("ix_answer_vote_user_id", "user_id"),
    )

    # Composite primary key prevents duplicate votes from the same user.
    answer_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("answer.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # 1 = upvote, -1 = downvote.
    value: Mapped[int] = mapped_column(SmallInteger, nullable=False)
