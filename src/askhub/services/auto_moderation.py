"""Automatic pre-screening of submitted text.

``analyze_content`` is pure and deterministic so it can be tested without a
database. ``auto_flag_content`` writes a system report when the score
crosses the configured threshold.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from askhub.core.settings import Settings, settings as default_settings
from askhub.models import Report, ReportPriority, ReportReason, ReportStatus, ReportType

logger = logging.getLogger(__name__)

_LINK_PATTERN = re.compile(r"https?://\S+")
_UPPERCASE_PATTERN = re.compile(r"[A-Z]")
_WHITESPACE_PATTERN = re.compile(r"\s")

# Words shorter than this are ignored by the repetition signal.
MIN_REPEATED_WORD_LENGTH = 4


@dataclass(frozen=True)
class ContentAnalysis:
    """Score and human-readable reasons produced by ``analyze_content``."""

    score: int = 0
    flags: list[str] = field(default_factory=list)


def analyze_content(content: str | None, config: Settings | None = None) -> ContentAnalysis:
    """Score free text on spam and abuse signals.

    Args:
        content: Text to score. Empty or missing text scores zero.
        config: Settings providing keyword lists and thresholds.

    Returns:
        The total score and the list of signals that fired.
    """
    if not content:
        return ContentAnalysis()

    config = config or default_settings
    flags: list[str] = []
    score = 0
    text = content.lower()

    spam_matches = [keyword for keyword in config.moderation_spam_keywords if keyword in text]
    if spam_matches:
        flags.append(f"Potential spam keywords: {', '.join(spam_matches)}")
        score += len(spam_matches) * 2

    link_count = len(_LINK_PATTERN.findall(content))
    if link_count > config.moderation_link_allowance:
        flags.append(f"Too many links: {link_count}")
        score += link_count

    caps_count = len(_UPPERCASE_PATTERN.findall(content))
    total_chars = len(_WHITESPACE_PATTERN.sub("", content))
    caps_ratio = caps_count / total_chars if total_chars else 0.0
    shouting = caps_ratio > config.moderation_caps_ratio
    if shouting and total_chars >= config.moderation_caps_min_chars:
        flags.append("Excessive capital letters")
        score += 3

    word_counts = Counter(
        word for word in text.split() if len(word) >= MIN_REPEATED_WORD_LENGTH
    )
    repeated = [word for word, count in word_counts.items() if count > config.moderation_repeat_limit]
    if repeated:
        flags.append(f"Repetitive words: {', '.join(repeated)}")
        score += len(repeated) * 2

    # Naive negation check: "not stupid" cancels "stupid".
    flagged = [
        word
        for word in config.moderation_flagged_words
        if word in text and f"not {word}" not in text
    ]
    if flagged:
        flags.append("Potentially inappropriate language")
        score += len(flagged) * 3

    return ContentAnalysis(score=score, flags=flags)


def priority_for(score: int, config: Settings | None = None) -> ReportPriority:
    """Map an auto-flag score to a report priority."""
    config = config or default_settings
    if score >= config.auto_flag_high_priority_threshold:
        return ReportPriority.HIGH
    return ReportPriority.MEDIUM


def auto_flag_content(
    session: Session,
    report_type: ReportType | str,
    target_id: int,
    content: str | None,
    owner_id: int,
    config: Settings | None = None,
) -> Report | None:
    """Add a pending system report to the session when content scores high.

    The caller owns the transaction; nothing is committed here.
    """
    config = config or default_settings
    analysis = analyze_content(content, config)
    if analysis.score < config.auto_flag_threshold:
        return None

    report = Report(
        report_type=ReportType(report_type).value,
        target_id=target_id,
        reported_by=None,
        content_owner=owner_id,
        reason=ReportReason.SPAM.value,
        description=f"Auto-flagged: {'; '.join(analysis.flags)}"[:500],
        priority=priority_for(analysis.score, config).value,
        auto_flagged=True,
        severity_score=analysis.score,
        status=ReportStatus.PENDING.value,
    )
    session.add(report)
    logger.info(
        "Auto-flagged %s %s with score %d (%s)",
        report.report_type,
        target_id,
        analysis.score,
        report.priority,
    )
    return report
