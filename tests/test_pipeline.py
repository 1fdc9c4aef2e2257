"""Tests for the analysis pipeline and classifier merging.

**Feature: trade-journal**
"""

import asyncio
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from tradejournal.analysis.pipeline import (
    analyze_entries,
    analyze_entry,
    classify_entries,
    classify_safely,
    detect_entry_tags,
)
from tradejournal.models import DetectedTag, JournalEntry

CHASED = "Chased a few setups today but took SL every time."


class FakeClassifier:
    """Returns fixed tags and records the texts it saw."""

    def __init__(self, tags=None):
        self.tags = tags or []
        self.calls: list[str] = []

    async def classify(self, text: str) -> list[DetectedTag]:
        self.calls.append(text)
        return list(self.tags)


class FailingClassifier:
    async def classify(self, text: str) -> list[DetectedTag]:
        raise RuntimeError("network down")


class HangingClassifier:
    async def classify(self, text: str) -> list[DetectedTag]:
        await asyncio.Event().wait()
        return []


class WrongShapeClassifier:
    def __init__(self, result):
        self.result = result

    async def classify(self, text: str):
        return self.result


def _names(tags: list[DetectedTag]) -> set[str]:
    return {tag.tag for tag in tags}


class TestClassifySafely:
    """
    **Feature: trade-journal, Property 20: Classifier Failures Degrade**

    *For any* classifier failure, the result is an empty tag list.
    """

    def test_success(self):
        tag = DetectedTag(tag="overtrading", severity="med", confidence=0.8)
        result = asyncio.run(classify_safely(FakeClassifier([tag]), "text"))
        assert result == [tag]

    def test_exception(self):
        assert asyncio.run(classify_safely(FailingClassifier(), "text")) == []

    def test_timeout(self):
        assert asyncio.run(classify_safely(HangingClassifier(), "text", timeout=0.01)) == []

    def test_unknown_tags_dropped(self):
        tags = [
            DetectedTag(tag="invented_tag", severity="high", confidence=0.9),
            DetectedTag(tag="bias_lock", severity="high", confidence=0.9),
        ]
        result = asyncio.run(classify_safely(FakeClassifier(tags), "text"))
        assert _names(result) == {"bias_lock"}

    @pytest.mark.parametrize("result", [None, "bias_lock", {"tag": "bias_lock"}, [{"tag": "bias_lock"}]])
    def test_wrong_shape(self, result):
        assert asyncio.run(classify_safely(WrongShapeClassifier(result), "text")) == []


class TestClassifyEntries:
    """
    **Feature: trade-journal, Property 21: Batched Classification**

    *For any* number of texts, results come back one per text in order,
    with a delay between batches only.
    """

    def test_batches_with_delay(self):
        classifier = FakeClassifier()
        texts = [f"entry {i}" for i in range(7)]

        with patch("tradejournal.analysis.pipeline.asyncio.sleep", new=AsyncMock()) as sleep:
            results = asyncio.run(classify_entries(classifier, texts, batch_size=3, delay=2.5))

        assert results == [[]] * 7
        assert sorted(classifier.calls) == sorted(texts)
        assert sleep.await_count == 2
        sleep.assert_awaited_with(2.5)

    def test_invalid_batch_size(self):
        with pytest.raises(ValueError):
            asyncio.run(classify_entries(FakeClassifier(), ["x"], batch_size=0))

    @given(st.lists(st.text(max_size=20), max_size=12), st.integers(min_value=1, max_value=5))
    @settings(max_examples=30)
    def test_one_result_per_text(self, texts, batch_size):
        results = asyncio.run(classify_entries(FakeClassifier(), texts, batch_size=batch_size, delay=0))
        assert len(results) == len(texts)


class TestDetectEntryTags:
    """
    **Feature: trade-journal, Property 22: Rule And Classifier Merge**
    """

    def test_rules_only(self):
        tags = asyncio.run(detect_entry_tags(CHASED))
        assert _names(tags) == {"chasing_early_entry", "hard_stop_respected"}

    def test_classifier_overrides_rule_tag(self):
        remote = DetectedTag(tag="chasing_early_entry", severity="low", confidence=0.6, context="once")
        tags = asyncio.run(detect_entry_tags(CHASED, FakeClassifier([remote])))

        by_name = {tag.tag: tag for tag in tags}
        assert set(by_name) == {"chasing_early_entry", "hard_stop_respected"}
        assert by_name["chasing_early_entry"] == remote

    def test_failing_classifier_falls_back_to_rules(self):
        tags = asyncio.run(detect_entry_tags(CHASED, FailingClassifier()))
        assert _names(tags) == {"chasing_early_entry", "hard_stop_respected"}


class TestAnalyzeEntries:
    """
    **Feature: trade-journal, Property 23: Collection Analysis**
    """

    def test_analyze_entry(self):
        entry = analyze_entry(JournalEntry(date=date(2025, 3, 21), content=CHASED))
        assert entry.process_score == 47
        assert len(entry.detected_tags) == 2

    def test_analyze_entries(self):
        entries = [
            JournalEntry(date=date(2025, 3, 20), content=CHASED),
            JournalEntry(date=date(2025, 3, 21), content="Quiet day, nothing to report."),
        ]
        result = asyncio.run(analyze_entries(entries))

        assert [entry.process_score for entry in result.entries] == [47, 50]
        assert [entry.id for entry in result.entries] == [entry.id for entry in entries]
        assert result.average_process_score == pytest.approx(48.5)
        assert _names_from_shares(result.distribution.strengths) == {"hard_stop_respected"}
        assert _names_from_shares(result.distribution.weaknesses) == {"chasing_early_entry"}
        assert result.weekly_plan.date == date(2025, 3, 21)

    def test_empty_collection(self):
        result = asyncio.run(analyze_entries([], classifier=FakeClassifier(), as_of=date(2025, 3, 21)))

        assert result.entries == []
        assert result.average_process_score == 0
        assert result.distribution.strengths == []
        assert result.weekly_plan.custom_reminders == []

    def test_classifier_failures_never_propagate(self):
        entries = [JournalEntry(date=date(2025, 3, 21), content=CHASED)] * 3
        result = asyncio.run(
            analyze_entries(entries, classifier=FailingClassifier(), batch_size=2, delay=0)
        )
        assert [entry.process_score for entry in result.entries] == [47, 47, 47]

    def test_existing_tags_replaced(self):
        stale = JournalEntry(
            date=date(2025, 3, 21),
            content="took SL",
            detected_tags=[DetectedTag(tag="bias_lock", severity="high", confidence=1.0)],
            process_score=42,
        )
        analyzed = asyncio.run(analyze_entries([stale])).entries[0]

        assert _names(analyzed.detected_tags) == {"hard_stop_respected"}
        assert analyzed.process_score == 55


def _names_from_shares(shares) -> set[str]:
    return {share.tag for share in shares}
