"""Journal analysis pipeline.

Runs the keyword rule engine over every entry, optionally asks an external
classifier for a second opinion (batched, rate limited, time boxed), merges
the two, scores each entry and aggregates the collection into
distributions, a mean score and a plan.
"""

import asyncio
import logging
from datetime import date
from typing import Optional, Protocol

from tradejournal.analysis.aggregate import aggregate
from tradejournal.analysis.catalog import is_known_tag
from tradejournal.analysis.plan import generate_daily_plan
from tradejournal.analysis.rules import detect_tags, merge_tags
from tradejournal.analysis.scoring import calculate_process_score
from tradejournal.models import DetectedTag, JournalAnalysis, JournalEntry

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_DELAY_SECONDS = 1.0
DEFAULT_TIMEOUT_SECONDS = 30.0


class TagClassifier(Protocol):
    """External classifier returning tags in the catalog shape."""

    async def classify(self, text: str) -> list[DetectedTag]:
        ...


async def classify_safely(
    classifier: TagClassifier,
    text: str,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> list[DetectedTag]:
    """Call the classifier, turning any failure into no tags.

    Args:
        classifier: External classifier.
        text: Raw entry text.
        timeout: Seconds to wait before giving up; None waits forever.

    Returns:
        Catalog tags from the classifier, or an empty list.
    """
    try:
        result = await asyncio.wait_for(classifier.classify(text), timeout)
    except asyncio.TimeoutError:
        logger.warning("Classifier timed out after %ss, using rule tags only", timeout)
        return []
    except Exception as exc:
        logger.warning("Classifier failed (%s), using rule tags only", exc)
        return []

    if not isinstance(result, list):
        logger.warning("Classifier returned %s instead of a list", type(result).__name__)
        return []
    return [
        tag for tag in result
        if isinstance(tag, DetectedTag) and is_known_tag(tag.tag)
    ]


async def classify_entries(
    classifier: TagClassifier,
    texts: list[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay: float = DEFAULT_DELAY_SECONDS,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> list[list[DetectedTag]]:
    """Classify texts in sequential batches.

    Calls within a batch run concurrently; batches are separated by
    ``delay`` seconds to respect the remote rate limit.

    Returns:
        One tag list per text, in input order.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")

    results: list[list[DetectedTag]] = []
    for start in range(0, len(texts), batch_size):
        batch = texts[start:start + batch_size]
        results.extend(
            await asyncio.gather(
                *(classify_safely(classifier, text, timeout) for text in batch)
            )
        )
        if start + batch_size < len(texts):
            await asyncio.sleep(delay)
    return results


async def detect_entry_tags(
    text: str,
    classifier: Optional[TagClassifier] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> list[DetectedTag]:
    """Rule-engine tags for one text, merged with classifier tags if given."""
    rule_tags = detect_tags(text)
    if classifier is None:
        return rule_tags
    return merge_tags(await classify_safely(classifier, text, timeout), rule_tags)


def apply_tags(entry: JournalEntry, tags: list[DetectedTag]) -> JournalEntry:
    """Copy of ``entry`` carrying ``tags`` and the score they produce."""
    return entry.model_copy(
        update={
            "detected_tags": list(tags),
            "process_score": calculate_process_score(tags),
        }
    )


def analyze_entry(entry: JournalEntry) -> JournalEntry:
    """Re-analyze one entry with the rule engine only."""
    return apply_tags(entry, detect_tags(entry.content))


async def analyze_entries(
    entries: list[JournalEntry],
    classifier: Optional[TagClassifier] = None,
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay: float = DEFAULT_DELAY_SECONDS,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
    as_of: Optional[date] = None,
) -> JournalAnalysis:
    """Analyze a collection of journal entries.

    Args:
        entries: Entries to (re-)analyze. Existing tags and scores are
            replaced.
        classifier: Optional external classifier; its tags win per tag name.
        batch_size: Classifier calls per batch.
        delay: Seconds between classifier batches.
        timeout: Per-call classifier timeout in seconds.
        as_of: Plan date. Defaults to the latest entry date, or today.

    Returns:
        Analyzed entries with distributions, mean score and plan.
    """
    if classifier is not None and entries:
        remote = await classify_entries(
            classifier,
            [entry.content for entry in entries],
            batch_size=batch_size,
            delay=delay,
            timeout=timeout,
        )
    else:
        remote = [[] for _ in entries]

    analyzed = [
        apply_tags(entry, merge_tags(remote_tags, detect_tags(entry.content)))
        for entry, remote_tags in zip(entries, remote)
    ]

    distribution, average = aggregate(analyzed)

    if as_of is None:
        as_of = max((entry.date for entry in analyzed), default=date.today())

    logger.debug("Analyzed %d entries, mean score %.1f", len(analyzed), average)

    return JournalAnalysis(
        entries=analyzed,
        distribution=distribution,
        average_process_score=average,
        weekly_plan=generate_daily_plan(analyzed, as_of),
    )
