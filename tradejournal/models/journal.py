"""Journal entry data models."""

import uuid
from datetime import date as date_type
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

Severity = Literal["low", "med", "high"]


def new_entry_id() -> str:
    """Generate a unique journal entry id."""
    return f"journal-{uuid.uuid4().hex}"


class DetectedTag(BaseModel):
    """A behavioral tag detected in one journal entry."""

    tag: str = Field(..., min_length=1, description="Catalog tag name")
    severity: Severity = Field(..., description="Tag severity (low/med/high)")
    confidence: float = Field(..., ge=0, le=1, description="Detection confidence")
    matched_phrases: list[str] = Field(
        default_factory=list, description="Phrases that triggered this tag"
    )
    context: Optional[str] = Field(default=None, description="Extracted context")

    model_config = {"frozen": True}


class JournalEntry(BaseModel):
    """Represents a free-text trading journal entry."""

    id: str = Field(default_factory=new_entry_id, min_length=1, description="Entry ID")
    date: date_type = Field(..., description="Journal entry date")
    content: str = Field(..., description="Full raw journal text")
    trade_ids: list[str] = Field(default_factory=list, description="Associated trade IDs")
    detected_tags: Optional[list[DetectedTag]] = Field(
        default=None, description="Tags from the last analysis run"
    )
    process_score: Optional[int] = Field(
        default=None, ge=0, le=100, description="Process score from the last analysis run"
    )
    created_at: Optional[datetime] = Field(default=None, description="Creation timestamp")

    model_config = {"frozen": True}


class SetupDetails(BaseModel):
    """Setup fields extracted from an entry."""

    entry: Optional[str] = None
    position_size: Optional[str] = None
    risk: Optional[str] = None
    exit: Optional[str] = None

    model_config = {"frozen": True}


class SessionNotes(BaseModel):
    """Execution notes per trading session."""

    morning: Optional[str] = None
    afternoon: Optional[str] = None
    night: Optional[str] = None

    model_config = {"frozen": True}


class ParsedJournal(BaseModel):
    """Loosely structured fields extracted from one raw journal block."""

    date: str = Field(..., description="Extracted date as YYYY-MM-DD text")
    conviction: Optional[str] = None
    setup: SetupDetails = Field(default_factory=SetupDetails)
    lessons: list[str] = Field(default_factory=list)
    execution: SessionNotes = Field(default_factory=SessionNotes)
    trade_management: Optional[str] = None
    missed_opportunities: Optional[str] = None
    final_thoughts: Optional[str] = None
    raw_content: str = Field(..., description="The block verbatim, trimmed")

    model_config = {"frozen": True}

    @property
    def sessions(self) -> dict[str, str]:
        """Session name to text, for sessions that were found."""
        return {
            name: text
            for name, text in self.execution.model_dump().items()
            if text
        }
