"""Journal behavioral analysis.

- parser: split raw journal text into entries and extract fields
- rules: keyword rule engine over the fixed tag catalog
- scoring: bounded process score
- aggregate: tag distributions and day/week summaries
- plan: rule-based daily plan
- pipeline: end-to-end analysis with an optional external classifier
"""

from tradejournal.analysis.catalog import (
    CATALOG,
    STRENGTH_TAGS,
    WEAKNESS_TAGS,
    TagDefinition,
    TriggerGroup,
)
from tradejournal.analysis.parser import parse_journal, to_journal_entries
from tradejournal.analysis.rules import detect_tags, merge_tags
from tradejournal.analysis.scoring import calculate_process_score
from tradejournal.analysis.aggregate import (
    aggregate,
    average_process_score,
    calculate_distribution,
    summarize_day,
    summarize_week,
)
from tradejournal.analysis.plan import generate_daily_plan
from tradejournal.analysis.pipeline import TagClassifier, analyze_entries, analyze_entry

__all__ = [
    "CATALOG",
    "STRENGTH_TAGS",
    "WEAKNESS_TAGS",
    "TagDefinition",
    "TriggerGroup",
    "parse_journal",
    "to_journal_entries",
    "detect_tags",
    "merge_tags",
    "calculate_process_score",
    "aggregate",
    "average_process_score",
    "calculate_distribution",
    "summarize_day",
    "summarize_week",
    "generate_daily_plan",
    "analyze_entries",
    "analyze_entry",
    "TagClassifier",
]
