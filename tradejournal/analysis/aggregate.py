"""Tag distributions, mean scores and day/week summaries."""

import math
from datetime import date, timedelta

from tradejournal.analysis.catalog import (
    STRENGTH_TAG_SET,
    STRENGTH_TAGS,
    WEAKNESS_TAG_SET,
    WEAKNESS_TAGS,
)
from tradejournal.analysis.scoring import BASELINE_SCORE, entry_score
from tradejournal.models import (
    DaySummary,
    DetectedTag,
    JournalEntry,
    TagDistribution,
    TagShare,
    WeekSummary,
)

SEVERITY_WEIGHTS = {"high": 3, "med": 2, "low": 1}


def _shares(weights: dict[str, int], occurrences: dict[str, int]) -> list[TagShare]:
    total = sum(weights.values())
    shares = [
        TagShare(
            tag=tag,
            percentage=(weight / total) * 100 if total > 0 else 0.0,
            count=weight,
            occurrences=occurrences[tag],
        )
        for tag, weight in weights.items()
        if weight > 0
    ]
    # sorted() is stable, so ties keep catalog order
    return sorted(shares, key=lambda share: share.percentage, reverse=True)


def calculate_distribution(entries: list[JournalEntry]) -> TagDistribution:
    """Severity-weighted strength and weakness distributions.

    Each detected tag adds 3/2/1 (high/med/low) to its tag's weight.
    Percentages are relative to the family total; tags with zero weight
    are left out.

    Args:
        entries: Analyzed entries. Entries without tags contribute nothing.

    Returns:
        Strength and weakness shares, highest percentage first.
    """
    strength_weights = dict.fromkeys(STRENGTH_TAGS, 0)
    weakness_weights = dict.fromkeys(WEAKNESS_TAGS, 0)
    strength_hits = dict.fromkeys(STRENGTH_TAGS, 0)
    weakness_hits = dict.fromkeys(WEAKNESS_TAGS, 0)

    for entry in entries:
        for tag in entry.detected_tags or []:
            weight = SEVERITY_WEIGHTS[tag.severity]
            if tag.tag in strength_weights:
                strength_weights[tag.tag] += weight
                strength_hits[tag.tag] += 1
            elif tag.tag in weakness_weights:
                weakness_weights[tag.tag] += weight
                weakness_hits[tag.tag] += 1

    return TagDistribution(
        strengths=_shares(strength_weights, strength_hits),
        weaknesses=_shares(weakness_weights, weakness_hits),
    )


def average_process_score(entries: list[JournalEntry]) -> float:
    """Mean process score, 0 for no entries.

    Entries without a stored score are scored from their tags, so an
    untagged entry counts as the neutral 50.
    """
    if not entries:
        return 0.0
    return sum(entry_score(entry) for entry in entries) / len(entries)


def aggregate(entries: list[JournalEntry]) -> tuple[TagDistribution, float]:
    """Distributions plus mean process score for a set of entries."""
    return calculate_distribution(entries), average_process_score(entries)


def _split_families(tags: list[DetectedTag]) -> tuple[list[DetectedTag], list[DetectedTag]]:
    strengths = [tag for tag in tags if tag.tag in STRENGTH_TAG_SET]
    weaknesses = [tag for tag in tags if tag.tag in WEAKNESS_TAG_SET]
    return strengths, weaknesses


def summarize_day(day: date, entries: list[JournalEntry]) -> DaySummary:
    """Summarize the entries written for one day.

    Args:
        day: Calendar day to summarize.
        entries: Entries to pick from; only those dated ``day`` are used.

    Returns:
        DaySummary with the day's tags split by family and the rounded
        mean process score (50 when the day has no entries).
    """
    day_entries = [entry for entry in entries if entry.date == day]
    tags = [tag for entry in day_entries for tag in entry.detected_tags or []]
    strengths, weaknesses = _split_families(tags)

    if day_entries:
        score = int(math.floor(average_process_score(day_entries) + 0.5))
    else:
        score = BASELINE_SCORE

    return DaySummary(
        date=day,
        entries=day_entries,
        strengths=strengths,
        weaknesses=weaknesses,
        process_score=score,
        strength_count=len(strengths),
        weakness_count=len(weaknesses),
    )


def summarize_week(start: date, end: date, entries: list[JournalEntry]) -> WeekSummary:
    """Summarize entries dated between ``start`` and ``end`` inclusive.

    Only days with at least one entry get a DaySummary. Percentages are
    shares of raw tag occurrences; weighted scores use the 3/2/1 severity
    weights.
    """
    in_range = [entry for entry in entries if start <= entry.date <= end]

    days = []
    current = start
    while current <= end:
        if any(entry.date == current for entry in in_range):
            days.append(summarize_day(current, in_range))
        current += timedelta(days=1)

    strength_breakdown = dict.fromkeys(STRENGTH_TAGS, 0)
    weakness_breakdown = dict.fromkeys(WEAKNESS_TAGS, 0)
    weighted_strength = 0
    weighted_weakness = 0

    for entry in in_range:
        for tag in entry.detected_tags or []:
            if tag.tag in strength_breakdown:
                strength_breakdown[tag.tag] += 1
                weighted_strength += SEVERITY_WEIGHTS[tag.severity]
            elif tag.tag in weakness_breakdown:
                weakness_breakdown[tag.tag] += 1
                weighted_weakness += SEVERITY_WEIGHTS[tag.severity]

    strength_total = sum(strength_breakdown.values())
    weakness_total = sum(weakness_breakdown.values())
    total = strength_total + weakness_total

    return WeekSummary(
        start_date=start,
        end_date=end,
        days=days,
        strength_percentage=(strength_total / total) * 100 if total else 0.0,
        weakness_percentage=(weakness_total / total) * 100 if total else 0.0,
        strength_breakdown=strength_breakdown,
        weakness_breakdown=weakness_breakdown,
        weighted_strength_score=weighted_strength,
        weighted_weakness_score=weighted_weakness,
    )
