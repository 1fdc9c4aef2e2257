"""Data models for TradeJournal."""

from tradejournal.models.journal import (
    DetectedTag,
    JournalEntry,
    ParsedJournal,
    SessionNotes,
    SetupDetails,
    Severity,
)
from tradejournal.models.plan import (
    DailyPlan,
    DaySummary,
    JournalAnalysis,
    TagDistribution,
    TagShare,
    WeekSummary,
)

__all__ = [
    "DetectedTag",
    "JournalEntry",
    "ParsedJournal",
    "SessionNotes",
    "SetupDetails",
    "Severity",
    "DailyPlan",
    "DaySummary",
    "JournalAnalysis",
    "TagDistribution",
    "TagShare",
    "WeekSummary",
]
