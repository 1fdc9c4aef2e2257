"""Parser for Discord-style trading journal text.

Splits a blob of concatenated journal entries into blocks and pulls
loosely structured fields out of each block with label-anchored patterns.
Every extraction degrades to "field absent"; nothing here raises for
text input.
"""

import logging
import re
from datetime import date, datetime
from typing import Optional

from tradejournal.models.journal import (
    JournalEntry,
    ParsedJournal,
    SessionNotes,
    SetupDetails,
    new_entry_id,
)

logger = logging.getLogger(__name__)


MONTHS = {
    "january": "01", "jan": "01",
    "february": "02", "feb": "02",
    "march": "03", "mar": "03",
    "april": "04", "apr": "04",
    "may": "05",
    "june": "06", "jun": "06",
    "july": "07", "jul": "07",
    "august": "08", "aug": "08",
    "september": "09", "sept": "09", "sep": "09",
    "october": "10", "oct": "10",
    "november": "11", "nov": "11",
    "december": "12", "dec": "12",
}

MIN_BLOCK_LENGTH = 50
MIN_LESSON_LENGTH = 10

_MONTH_NAME = "(?:" + "|".join(sorted(MONTHS, key=len, reverse=True)) + r")\b"
_HEADING_PREFIX = r"Trading Journal[\s–—-]*"
_DAY_YEAR = r"\s+\d{1,2}[,\s]+\d{4}"

_HEADING_SPLIT = re.compile(rf"(?={_HEADING_PREFIX}{_MONTH_NAME}{_DAY_YEAR})", re.IGNORECASE)
_DATE_SPLIT = re.compile(rf"(?=\b{_MONTH_NAME}{_DAY_YEAR})", re.IGNORECASE)
_ENTRY_KEYWORDS = re.compile(r"conviction|setup|entry|exit|lesson|execution", re.IGNORECASE)

_HEADING_DATE = re.compile(
    rf"{_HEADING_PREFIX}([A-Za-z]+)\s+(\d{{1,2}})[,\s]+(\d{{4}})", re.IGNORECASE
)
_WORD_DATE = re.compile(r"\b([A-Za-z]+)\s+(\d{1,2})[,\s]+(\d{4})")
_US_DATE = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})")
_ISO_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

# Line start, allowing emoji, bullets and indentation before a label.
_LEAD = r"^[^\w\n]*"
_SEP = r"[ \t]*[:\-–—][ \t]*"

SECTION_LABELS = (
    "Trading Journal",
    "Overall Conviction",
    "Conviction",
    "Bias",
    "Setup Details",
    "Setup",
    "Entry",
    "Position Size",
    "Size",
    "Risk",
    "Exit",
    "Execution",
    "Morning Session",
    "Afternoon Session",
    "Night Session",
    "Lessons Learned",
    "Key Lessons",
    "Trade Management",
    "Missed Opportunities",
    "Missed Opportunity",
    "Final Thoughts",
    "Final Thought",
)

_HEADING_LINE = re.compile(
    _LEAD
    + "(?:"
    + "|".join(re.escape(label).replace(r"\ ", r"\s+") for label in SECTION_LABELS)
    + r")\b[ \t]*(?:[:\-–—]|$)",
    re.IGNORECASE | re.MULTILINE,
)

_LIST_MARKER = re.compile(
    r"^[ \t]*[-*]+[ \t]+|(?<!\S)\d{1,2}[.)](?=\s)|[•●▪✅❌]",
    re.MULTILINE,
)
_NUMBERED_LESSON = re.compile(r"\bLesson[ \t]+\d+[ \t]*:[ \t]*([^\n]+)", re.IGNORECASE)


def _field_pattern(label: str) -> re.Pattern:
    return re.compile(
        rf"{_LEAD}{label}{_SEP}(\S[^\n]*)$", re.IGNORECASE | re.MULTILINE
    )


def _section_pattern(label: str) -> re.Pattern:
    return re.compile(rf"{_LEAD}{label}\b[ \t]*[:\-–—]?[ \t]*", re.IGNORECASE | re.MULTILINE)


_CONVICTION_FIELDS = [
    _field_pattern(r"Overall\s+Conviction"),
    _field_pattern(r"Conviction"),
    _field_pattern(r"Bias"),
]
_ENTRY_FIELD = _field_pattern(r"Entry")
_SIZE_FIELD = _field_pattern(r"(?:Position\s+)?Size")
_RISK_FIELD = _field_pattern(r"Risk")
_EXIT_FIELD = _field_pattern(r"Exit")

_MORNING_SECTION = _section_pattern(r"Morning\s+Session")
_AFTERNOON_SECTION = _section_pattern(r"Afternoon\s+Session")
_NIGHT_SECTION = _section_pattern(r"Night\s+Session")
_LESSONS_SECTION = _section_pattern(r"(?:Lessons\s+Learned|Key\s+Lessons)")
_MANAGEMENT_SECTION = _section_pattern(r"Trade\s+Management")
_MISSED_SECTION = _section_pattern(r"Missed\s+Opportunit(?:y|ies)")
_FINAL_SECTION = _section_pattern(r"Final\s+Thoughts?")


# ==================== Segmentation ====================

def split_blocks(raw_text: str) -> list[str]:
    """Split raw text into candidate entry blocks.

    Splits on "Trading Journal - <Month> <Day>, <Year>" headings, or on bare
    "<Month> <Day>, <Year>" dates when no heading is present. Blocks that are
    too short or have none of the entry keywords are dropped.
    """
    if _HEADING_SPLIT.search(raw_text):
        candidates = _HEADING_SPLIT.split(raw_text)
    else:
        candidates = _DATE_SPLIT.split(raw_text)

    blocks = []
    for candidate in candidates:
        trimmed = candidate.strip()
        if len(trimmed) < MIN_BLOCK_LENGTH:
            if trimmed:
                logger.debug("Dropping short block (%d chars)", len(trimmed))
            continue
        if not _ENTRY_KEYWORDS.search(trimmed):
            logger.debug("Dropping block without entry keywords: %.40r", trimmed)
            continue
        blocks.append(trimmed)
    return blocks


# ==================== Dates ====================

def _month_number(name: str) -> Optional[str]:
    return MONTHS.get(name.lower())


def _format_date(year: str, month: str, day: str) -> str:
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def extract_date(text: str, today: Optional[date] = None) -> str:
    """Extract the entry date as YYYY-MM-DD text.

    Tries, in order: a "Trading Journal" heading date, any "<Month> <Day>,
    <Year>" date, MM/DD/YYYY, then YYYY-MM-DD. Falls back to ``today``.
    """
    match = _HEADING_DATE.search(text)
    if match and _month_number(match.group(1)):
        return _format_date(match.group(3), _month_number(match.group(1)), match.group(2))

    for match in _WORD_DATE.finditer(text):
        month = _month_number(match.group(1))
        if month:
            return _format_date(match.group(3), month, match.group(2))

    match = _US_DATE.search(text)
    if match:
        month, day, year = match.groups()
        return _format_date(year, month, day)

    match = _ISO_DATE.search(text)
    if match:
        return match.group(0)

    return (today or date.today()).isoformat()


# ==================== Fields ====================

def _first_field(text: str, patterns: list[re.Pattern]) -> Optional[str]:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            value = match.group(1).strip()
            if value:
                return value
    return None


def _section(text: str, pattern: re.Pattern) -> Optional[str]:
    """Body of a section, from its label to the next section heading."""
    match = pattern.search(text)
    if not match:
        return None
    next_heading = _HEADING_LINE.search(text, match.end())
    end = next_heading.start() if next_heading else len(text)
    body = text[match.end():end].strip()
    return body or None


def extract_conviction(text: str) -> Optional[str]:
    return _first_field(text, _CONVICTION_FIELDS)


def extract_setup(text: str) -> SetupDetails:
    return SetupDetails(
        entry=_first_field(text, [_ENTRY_FIELD]),
        position_size=_first_field(text, [_SIZE_FIELD]),
        risk=_first_field(text, [_RISK_FIELD]),
        exit=_first_field(text, [_EXIT_FIELD]),
    )


def extract_execution(text: str) -> SessionNotes:
    return SessionNotes(
        morning=_section(text, _MORNING_SECTION),
        afternoon=_section(text, _AFTERNOON_SECTION),
        night=_section(text, _NIGHT_SECTION),
    )


def extract_lessons(text: str) -> list[str]:
    """Extract lesson strings.

    Items of the "Lessons Learned" section split on list markers, followed
    by any standalone "Lesson <n>:" lines. Fragments of 10 characters or
    fewer are noise. Duplicates keep their first position.
    """
    lessons = []

    body = _section(text, _LESSONS_SECTION)
    if body:
        for item in _LIST_MARKER.split(body):
            item = item.strip()
            if len(item) > MIN_LESSON_LENGTH:
                lessons.append(item)

    for match in _NUMBERED_LESSON.finditer(text):
        item = match.group(1).strip()
        if len(item) > MIN_LESSON_LENGTH:
            lessons.append(item)

    return list(dict.fromkeys(lessons))


# ==================== Public API ====================

def parse_block(block: str, today: Optional[date] = None) -> ParsedJournal:
    """Parse one trimmed journal block."""
    return ParsedJournal(
        date=extract_date(block, today),
        conviction=extract_conviction(block),
        setup=extract_setup(block),
        lessons=extract_lessons(block),
        execution=extract_execution(block),
        trade_management=_section(block, _MANAGEMENT_SECTION),
        missed_opportunities=_section(block, _MISSED_SECTION),
        final_thoughts=_section(block, _FINAL_SECTION),
        raw_content=block,
    )


def parse_journal(raw_text: str | bytes | None, today: Optional[date] = None) -> list[ParsedJournal]:
    """Parse a blob of journal text into entries.

    Args:
        raw_text: Text containing one or more concatenated journal entries.
            Bytes are decoded as UTF-8, replacing invalid sequences.
        today: Date used when an entry carries no recognizable date.

    Returns:
        Parsed entries in text order. Empty for empty or whitespace input.
    """
    if isinstance(raw_text, bytes):
        raw_text = raw_text.decode("utf-8", errors="replace")
    if not raw_text or not raw_text.strip():
        return []

    return [parse_block(block, today) for block in split_blocks(raw_text)]


def to_journal_entries(
    parsed: list[ParsedJournal],
    today: Optional[date] = None,
) -> list[JournalEntry]:
    """Convert parsed blocks into unanalyzed journal entries.

    A parsed date that is not a real calendar day falls back to ``today``.
    """
    fallback = today or date.today()
    created_at = datetime.now()
    entries = []
    for item in parsed:
        try:
            entry_date = date.fromisoformat(item.date)
        except ValueError:
            logger.debug("Invalid parsed date %r, using %s", item.date, fallback)
            entry_date = fallback
        entries.append(
            JournalEntry(
                id=new_entry_id(),
                date=entry_date,
                content=item.raw_content,
                created_at=created_at,
            )
        )
    return entries
