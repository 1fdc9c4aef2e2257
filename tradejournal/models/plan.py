"""Aggregate and plan data models."""

from datetime import date as date_type
from pydantic import BaseModel, Field

from tradejournal.models.journal import DetectedTag, JournalEntry


class DailyPlan(BaseModel):
    """Rule-derived trading guardrails for a day or week."""

    date: date_type = Field(..., description="Plan date")
    risk_cap: str = Field(..., description="Dollar risk cap")
    max_stop: str = Field(..., description="Maximum stop distance")
    sizing_ladder: str = Field(..., description="Position sizing ladder")
    two_strike_rule: bool = Field(default=False, description="Walk away after 2 bad trades")
    no_first_5_min: bool = Field(default=False, description="Skip the first 5 minutes")
    no_data_candle: bool = Field(default=False, description="Skip the data candle")
    retest_only: bool = Field(default=False, description="Only enter on retests")
    be_after_structure: bool = Field(
        default=False, description="Breakeven only after structure breaks"
    )
    chop_filter: bool = Field(default=True, description="Sit out choppy conditions")
    bias_flip_protocol: bool = Field(default=False, description="Flip bias after losses")
    custom_reminders: list[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class TagShare(BaseModel):
    """One tag's share of its family's weighted total."""

    tag: str
    percentage: float = Field(..., ge=0, le=100)
    count: int = Field(..., ge=0, description="Severity-weighted count")
    occurrences: int = Field(default=0, ge=0, description="Raw detection count")

    model_config = {"frozen": True}


class TagDistribution(BaseModel):
    """Strength and weakness distributions across entries."""

    strengths: list[TagShare] = Field(default_factory=list)
    weaknesses: list[TagShare] = Field(default_factory=list)

    model_config = {"frozen": True}


class DaySummary(BaseModel):
    """Tags and score for a single journal day."""

    date: date_type
    entries: list[JournalEntry] = Field(default_factory=list)
    strengths: list[DetectedTag] = Field(default_factory=list)
    weaknesses: list[DetectedTag] = Field(default_factory=list)
    process_score: int = Field(..., ge=0, le=100)
    strength_count: int = Field(default=0, ge=0)
    weakness_count: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class WeekSummary(BaseModel):
    """Tag breakdown over a date range."""

    start_date: date_type
    end_date: date_type
    days: list[DaySummary] = Field(default_factory=list)
    strength_percentage: float = Field(default=0.0, ge=0, le=100)
    weakness_percentage: float = Field(default=0.0, ge=0, le=100)
    strength_breakdown: dict[str, int] = Field(default_factory=dict)
    weakness_breakdown: dict[str, int] = Field(default_factory=dict)
    weighted_strength_score: int = Field(default=0, ge=0)
    weighted_weakness_score: int = Field(default=0, ge=0)

    model_config = {"frozen": True}


class JournalAnalysis(BaseModel):
    """Result of analyzing a collection of entries."""

    entries: list[JournalEntry] = Field(default_factory=list)
    distribution: TagDistribution = Field(default_factory=TagDistribution)
    average_process_score: float = Field(default=0.0, ge=0, le=100)
    weekly_plan: DailyPlan

    model_config = {"frozen": True}
