"""Property-based tests for the plan generator.

**Feature: trade-journal**
"""

from datetime import date, timedelta

from hypothesis import given
from hypothesis import strategies as st

from tradejournal.analysis.catalog import CATALOG, WEAKNESS_TAGS
from tradejournal.analysis.plan import (
    MAX_STOP,
    PLAN_WINDOW,
    RISK_CAP,
    SIZING_LADDER,
    generate_daily_plan,
    recent_entries,
)
from tradejournal.models import DetectedTag, JournalEntry

AS_OF = date(2025, 3, 31)


def _entry(day: date, *names: str) -> JournalEntry:
    return JournalEntry(
        date=day,
        content="entry",
        detected_tags=[
            DetectedTag(tag=name, severity=CATALOG[name].severity, confidence=1.0)
            for name in names
        ],
    )


def _window(tagged: int, tag: str, size: int = PLAN_WINDOW) -> list[JournalEntry]:
    return [
        _entry(AS_OF - timedelta(days=i), *([tag] if i < tagged else []))
        for i in range(size)
    ]


class TestPlanGuardrails:
    """
    **Feature: trade-journal, Property 18: Weakness-Gated Guardrails**

    *For any* weakness frequency in the window, guardrails turn on exactly
    when their threshold is reached.
    """

    def test_premature_breakeven(self):
        plan = generate_daily_plan(_window(4, "premature_breakeven"), AS_OF)

        assert plan.be_after_structure is True
        assert plan.retest_only is False
        assert plan.no_first_5_min is False
        assert len(plan.custom_reminders) == 1
        assert "BE" in plan.custom_reminders[0]
        assert "structure" in plan.custom_reminders[0]

    def test_below_threshold(self):
        plan = generate_daily_plan(_window(2, "premature_breakeven"), AS_OF)
        assert plan.be_after_structure is False
        assert plan.custom_reminders == []

    def test_single_data_candle_violation(self):
        plan = generate_daily_plan(_window(1, "data_candle_violation"), AS_OF)
        assert plan.no_first_5_min is True
        assert plan.no_data_candle is True

    def test_overtrading_and_bias(self):
        entries = [_entry(AS_OF, "overtrading"), _entry(AS_OF, "overtrading"),
                   _entry(AS_OF, "bias_lock"), _entry(AS_OF, "bias_lock")]
        plan = generate_daily_plan(entries, AS_OF)

        assert plan.two_strike_rule is True
        assert plan.bias_flip_protocol is True
        assert len(plan.custom_reminders) == 2

    def test_baseline_values(self):
        plan = generate_daily_plan([], AS_OF)

        assert plan.date == AS_OF
        assert plan.risk_cap == RISK_CAP
        assert plan.max_stop == MAX_STOP
        assert plan.sizing_ladder == SIZING_LADDER
        assert plan.chop_filter is True
        assert plan.custom_reminders == []

    @given(st.lists(st.lists(st.sampled_from(WEAKNESS_TAGS), max_size=4), max_size=10))
    def test_one_reminder_per_triggered_weakness(self, tag_lists):
        entries = [_entry(AS_OF, *names) for names in tag_lists]
        plan = generate_daily_plan(entries, AS_OF)

        assert len(plan.custom_reminders) == len(set(plan.custom_reminders))
        assert plan.chop_filter is True
        assert plan.no_first_5_min == plan.no_data_candle


class TestPlanWindow:
    """
    **Feature: trade-journal, Property 19: Plan Window**

    *For any* entry list, only the 10 most recent entries up to the plan
    date are considered.
    """

    def test_older_entries_ignored(self):
        # Tagged entries sit outside the 10-entry window
        entries = [
            _entry(AS_OF - timedelta(days=i), *(["sizing_drift"] if i >= PLAN_WINDOW else []))
            for i in range(PLAN_WINDOW + 5)
        ]
        plan = generate_daily_plan(entries, AS_OF)
        assert plan.custom_reminders == []

    def test_future_entries_ignored(self):
        entries = [_entry(AS_OF + timedelta(days=1), "sizing_drift")]
        assert generate_daily_plan(entries, AS_OF).custom_reminders == []

    def test_recent_entries_newest_first(self):
        entries = [_entry(AS_OF - timedelta(days=i)) for i in range(15)][::-1]
        recent = recent_entries(entries, AS_OF)

        assert len(recent) == PLAN_WINDOW
        assert recent[0].date == AS_OF
        assert recent[-1].date == AS_OF - timedelta(days=PLAN_WINDOW - 1)
