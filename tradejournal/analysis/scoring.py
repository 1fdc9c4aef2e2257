"""Process score calculation."""

import math

from tradejournal.analysis.catalog import STRENGTH_TAG_SET, WEAKNESS_TAG_SET
from tradejournal.models.journal import DetectedTag, JournalEntry

BASELINE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

# Weaknesses penalize more than strengths reward.
STRENGTH_POINTS = {"high": 5, "med": 3, "low": 2}
WEAKNESS_POINTS = {"high": 8, "med": 5, "low": 3}


def calculate_process_score(tags: list[DetectedTag]) -> int:
    """Calculate a 0-100 process score from detected tags.

    Starts at a neutral 50, adds ``confidence * points`` for each strength
    and subtracts it for each weakness. Tags outside the catalog are
    ignored. The result is clamped, then rounded half up.

    Args:
        tags: Tags detected in one entry.

    Returns:
        Integer score between 0 and 100.
    """
    score = float(BASELINE_SCORE)

    for tag in tags:
        if tag.tag in STRENGTH_TAG_SET:
            score += STRENGTH_POINTS[tag.severity] * tag.confidence
        elif tag.tag in WEAKNESS_TAG_SET:
            score -= WEAKNESS_POINTS[tag.severity] * tag.confidence

    score = max(MIN_SCORE, min(MAX_SCORE, score))
    return int(math.floor(score + 0.5))


def entry_score(entry: JournalEntry) -> int:
    """Stored process score of an entry, recomputed from its tags if missing."""
    if entry.process_score is not None:
        return entry.process_score
    return calculate_process_score(entry.detected_tags or [])
