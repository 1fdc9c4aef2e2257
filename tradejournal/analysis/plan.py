"""Rule-based daily/weekly plan generation."""

from datetime import date

from tradejournal.analysis.catalog import WEAKNESS_TAGS
from tradejournal.models import DailyPlan, JournalEntry

# Fixed baseline guardrails
RISK_CAP = "$250-$500"
MAX_STOP = "15 points"
SIZING_LADDER = "1 NQ, scale to 3 MNQ"

# Number of most recent entries the plan looks at
PLAN_WINDOW = 10

# Weakness occurrence thresholds (within the window)
PREMATURE_BREAKEVEN_LIMIT = 3
CHASING_LIMIT = 2
DATA_CANDLE_LIMIT = 1
HESITATION_LIMIT = 3
OVERTRADING_LIMIT = 2
SIZING_DRIFT_LIMIT = 1
BIAS_LOCK_LIMIT = 2

REMINDERS = {
    "premature_breakeven": "⚠️ BE only AFTER structure breaks, not at fixed points",
    "chasing_early_entry": "⏳ Wait for candle closure - no chasing entries",
    "data_candle_violation": "🚫 NO trading first 5-minute candle",
    "hesitation_missed_entry": "✅ Define risk & execute on A+ setups",
    "overtrading": "🛑 Walk away after 2 bad trades",
    "sizing_drift": "💰 Max 1 NQ, never risk >15 points",
    "bias_lock": "🔄 Trade price action, not bias",
}


def recent_entries(entries: list[JournalEntry], as_of: date) -> list[JournalEntry]:
    """Most recent entries dated on or before ``as_of``, newest first."""
    eligible = [entry for entry in entries if entry.date <= as_of]
    eligible.sort(key=lambda entry: entry.date, reverse=True)
    return eligible[:PLAN_WINDOW]


def count_weaknesses(entries: list[JournalEntry]) -> dict[str, int]:
    """Unweighted weakness-tag occurrences across entries."""
    counts = dict.fromkeys(WEAKNESS_TAGS, 0)
    for entry in entries:
        for tag in entry.detected_tags or []:
            if tag.tag in counts:
                counts[tag.tag] += 1
    return counts


def generate_daily_plan(entries: list[JournalEntry], as_of: date) -> DailyPlan:
    """Generate a plan from weakness frequency in the last 10 entries.

    Args:
        entries: Analyzed journal entries.
        as_of: Plan date; later entries are ignored.

    Returns:
        DailyPlan with baseline values, weakness-gated guardrails and one
        reminder per triggered weakness.
    """
    freq = count_weaknesses(recent_entries(entries, as_of))

    triggered = {
        "premature_breakeven": freq["premature_breakeven"] >= PREMATURE_BREAKEVEN_LIMIT,
        "chasing_early_entry": freq["chasing_early_entry"] >= CHASING_LIMIT,
        "data_candle_violation": freq["data_candle_violation"] >= DATA_CANDLE_LIMIT,
        "hesitation_missed_entry": freq["hesitation_missed_entry"] >= HESITATION_LIMIT,
        "overtrading": freq["overtrading"] >= OVERTRADING_LIMIT,
        "sizing_drift": freq["sizing_drift"] >= SIZING_DRIFT_LIMIT,
        "bias_lock": freq["bias_lock"] >= BIAS_LOCK_LIMIT,
    }

    return DailyPlan(
        date=as_of,
        risk_cap=RISK_CAP,
        max_stop=MAX_STOP,
        sizing_ladder=SIZING_LADDER,
        two_strike_rule=triggered["overtrading"],
        no_first_5_min=triggered["data_candle_violation"],
        no_data_candle=triggered["data_candle_violation"],
        retest_only=triggered["chasing_early_entry"],
        be_after_structure=triggered["premature_breakeven"],
        chop_filter=True,
        bias_flip_protocol=triggered["bias_lock"],
        custom_reminders=[REMINDERS[tag] for tag, hit in triggered.items() if hit],
    )
