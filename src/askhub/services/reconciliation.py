"""Answer tally reconciliation.

Recomputes every ``answer.votes`` counter from the live ``answer_vote``
rows and overwrites any drift. The vote engine keeps both in step inside
one transaction, so corrections here point at out-of-band writes such as
manual SQL or a restored backup.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from askhub.db.session import atomic
from askhub.models import Answer, AnswerVote

logger = logging.getLogger(__name__)


def reconcile_answer_votes(session: Session) -> dict[str, Any]:
    """Validate answer tallies against the vote ledger and fix drift.

    Returns ``{"checked": N, "corrected": M, "corrections": [...]}``.
    """
    corrections: list[dict[str, int]] = []

    live_sum = (
        select(func.coalesce(func.sum(AnswerVote.value), 0))
        .where(AnswerVote.answer_id == Answer.id)
        .correlate(Answer)
        .scalar_subquery()
    )

    with atomic(session):
        rows = session.execute(select(Answer.id, Answer.votes, live_sum.label("actual"))).all()

        for row in rows:
            actual = int(row.actual)
            if row.votes == actual:
                continue
            corrections.append(
                {
                    "answer_id": row.id,
                    "stored": row.votes,
                    "actual": actual,
                    "diff": actual - row.votes,
                }
            )
            session.execute(
                update(Answer)
                .where(Answer.id == row.id)
                .values(votes=actual)
                .execution_options(synchronize_session=False)
            )

    session.expire_all()

    if corrections:
        logger.warning(
            "Vote reconciliation: corrected %d/%d answers: %s",
            len(corrections), len(rows), corrections,
        )
    else:
        logger.info("Vote reconciliation: all %d answers match", len(rows))

    return {
        "checked": len(rows),
        "corrected": len(corrections),
        "corrections": corrections,
        "timestamp": datetime.now(UTC).isoformat(),
    }
