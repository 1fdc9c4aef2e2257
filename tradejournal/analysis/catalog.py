"""Fixed catalog of behavioral tags.

Every tag carries its family (strength or weakness), a fixed severity and
ordered keyword trigger groups. The catalog is built once at import time
and exposed read-only.
"""

from types import MappingProxyType
from typing import Literal, Mapping

from pydantic import BaseModel, Field

from tradejournal.models.journal import Severity

TagFamily = Literal["strength", "weakness"]


class TriggerGroup(BaseModel):
    """Keywords sharing one confidence value."""

    keywords: tuple[str, ...] = Field(..., min_length=1)
    confidence: float = Field(..., gt=0, le=1)

    model_config = {"frozen": True}


class TagDefinition(BaseModel):
    """Catalog record for one behavioral tag."""

    name: str
    family: TagFamily
    severity: Severity
    description: str = ""
    triggers: tuple[TriggerGroup, ...] = ()

    model_config = {"frozen": True}


def _tag(
    name: str,
    family: TagFamily,
    severity: Severity,
    description: str,
    *groups: tuple[float, list[str]],
) -> TagDefinition:
    return TagDefinition(
        name=name,
        family=family,
        severity=severity,
        description=description,
        triggers=tuple(
            TriggerGroup(keywords=tuple(keywords), confidence=confidence)
            for confidence, keywords in groups
        ),
    )


_DEFINITIONS = [
    # ==================== Strengths ====================
    _tag(
        "patience_confirmation", "strength", "high",
        "Waiting for confirmation, patience in entries, not chasing",
        (0.9, [
            "waited for close", "waited patiently", "retest happen", "didn't chase",
            "patience paid", "stayed patient", "waiting for a sense of direction",
            "let it play out", "let the trade breathe", "waited for 100% confirmation",
            "stayed patient let a break and retest happen",
            "patience is the ultimate confidence", "great patience",
        ]),
        (0.8, [
            "aggressively rejected", "confirming my conviction", "confirmation of weakness",
            "confirmation under key level", "close below", "close above", "candle closure",
            "candle closure above", "candle closure below",
        ]),
        (0.7, ["didn't jump in too early", "not jump in too early", "waited"]),
    ),
    _tag(
        "level_thesis", "strength", "high",
        "Trading from key levels, demand/supply zones and chart structure",
        (0.9, [
            "key demand zone", "key levels", "demand/supply", "ORH", "ORL", "HTF context",
            "fair value gap", "macro key level", "micro key level", "charted demand",
            "charted levels", "key level", "retest of key level",
        ]),
        (0.8, [
            "retest of key level", "reclaimed a key level", "breakdown of key levels",
            "break-retest of key level", "bull flag", "bear flag",
        ]),
        (0.7, ["reading the chart", "trust your levels"]),
    ),
    _tag(
        "hard_stop_respected", "strength", "high",
        "Taking stop losses, cutting losses quickly, no hope/hold",
        (1.0, ["took SL", "no hope/hold", "let my S/L hit", "hard stops", "took my losses"]),
        (0.9, ["cut losses quickly", "power of cutting losses quickly"]),
    ),
    _tag(
        "base_hit_scalping", "strength", "med",
        "Taking small wins, scalping mindset, taking what the market gives",
        (0.9, [
            "took 1-2R", "base hit", "scalpers mindset", "took the scalp", "nice base hit",
            "small wins", "scalping edge", "consistently scalping",
            "took what the market gave", "scalp",
        ]),
        (0.8, [
            "took what the market gave", "took the profits that was given",
            "take the base hit",
        ]),
    ),
    _tag(
        "reset_composure", "strength", "med",
        "Stepping away, regaining discipline, mental reset",
        (1.0, [
            "stepped away", "regained discipline", "reset", "clear mind",
            "shutting the charts off", "clear my head", "walk away",
            "not letting 1 bad trade take me out of the game",
            "lock in make sure the smoke in my mind clears up",
        ]),
        (0.8, [
            "stayed composed", "mindset was solid", "staying sharp", "staying grounded",
            "not over-focusing",
        ]),
    ),
    _tag(
        "reflection_learning", "strength", "med",
        "Learning from mistakes, backtesting, self-reflection",
        (1.0, [
            "wrote clear lessons", "lessons learned", "mistake to correct",
            "huge lesson learned", "learn from the most", "backtest your entries",
            "backtest all these breakeven trades",
        ]),
        (0.7, ["room for improvement", "need to refine", "need to improve"]),
    ),
    _tag(
        "mnq_scaling", "strength", "low",
        "Using MNQ for flexible sizing and scaling",
        (1.0, [
            "scaled with MNQ", "added with MNQ", "flexible sizing", "mnq flexibility",
            "sized lightly and added", "mnq flexibility of getting an early entry",
        ]),
        (0.8, ["mnq is a lot of money", "trading mnq moving forward"]),
    ),
    # ==================== Weaknesses ====================
    _tag(
        "premature_breakeven", "weakness", "high",
        "Moving stop to breakeven too early, stopped at BE before structure breaks",
        (1.0, [
            "moved stop to breakeven too early", "breakeven way too many times",
            "stopped out at breakeven before structure broke", "premature breakeven",
            "breakeven first trade", "breakeven second trade",
            "anything 25 points should not reverse breakeven",
            "breakeven way to many times", "breakeven trades a lot",
            "breakeven damn near 1000000 times", "breakeven ok but stopped out twice",
            "got breakeven", "breakeven 2/2",
        ]),
        (0.9, [
            "trading my P&L, not the chart", "moved my trailing stop too early",
            "left 100points on the table", "moved my 50 point tp",
            "moved my trailing stop just to breakeven",
        ]),
        (0.8, [
            "bullish price action rewards structure, not just point-based risk models",
            "moved stop to breakeven as soon as i was up 1R",
        ]),
    ),
    _tag(
        "tight_trailing", "weakness", "high",
        "Trailing stops too tight, leaving money on the table",
        (1.0, [
            "trailed too tight", "moved trail early", "poor trailing management",
            "didn't get to TP", "3 points away from TP", "watched it completely reversed",
            "sold slightly early", "sold $2 early", "sold early before my target hit",
        ]),
        (0.9, [
            "left a lot on the table by not trailing longs effectively",
            "poor trade management",
        ]),
    ),
    _tag(
        "chasing_early_entry", "weakness", "high",
        "Chasing or rushing entries before confirmation",
        (1.0, [
            "chasing lows", "chased a few setups", "chase entry instant stop",
            "stop chasing", "every time you chase you pay", "literal chase of the bottom",
            "rushed entry", "rushed a few of my entries", "early on my entry",
            "early entry should be half size", "chasing never pays",
        ]),
        (0.9, ["entered late", "before retest/close", "jumped in front of", "rushed", "early"]),
        (0.8, ["not at my level, it's not my trade", "if it's not at my level"]),
    ),
    _tag(
        "bias_lock", "weakness", "high",
        "Stuck in a bias instead of trading price action",
        (1.0, [
            "stayed bearish despite PA changing", "stayed bullish despite PA changing",
            "kept shorting", "continued shorting & shorting & shorting & shorting",
            "stayed in my bias rather than trading what I was seeing",
            "stuck to my bias",
        ]),
        (0.9, ["neutralize my bias and trade price action"]),
        (0.7, ["didn't flip long stuck to my bias"]),
    ),
    _tag(
        "sizing_drift", "weakness", "high",
        "Over-risking, revenge sizing, too big in volatility",
        (1.0, [
            "too big in volatility", "revenge size", "eval/payout pressure",
            "blew an account", "blow up 2 accounts", "losing $1500",
            "no consistency rule got to me",
            "didn't think of how much i was losing instead thought of how much i can make",
            "lack of risk management",
            "larger moves & volatility calls for smaller size",
            "never risk more than 15 points on a single NQ",
            "never risk more than 25 on a trade", "risk 25 points with full size",
        ]),
        (0.9, ["too big", "too much size", "over-risking", "max size (1nq)"]),
        (0.8, ["could've cut size in half", "sizing down"]),
    ),
    _tag(
        "data_candle_violation", "weakness", "med",
        "Trading news/data candles or the first 5-minute candle",
        (1.0, [
            "traded news candle", "first 5-min", "data candle",
            "do not trade the first 5-minute candle", "first 15 min low",
            "trading the first 5-minute candle",
        ]),
        (0.9, ["unnecessary drawdown", "rookie mistake"]),
    ),
    _tag(
        "hesitation_missed_entry", "weakness", "med",
        "Missing opportunities, hesitating on valid setups",
        (1.0, [
            "A+ setup called out but no execution", "didn't execute", "missed opportunity",
            "no execution", "wasn't to confident in price action", "missed long entry",
            "missed opportunities of about 2 other trades", "no more hesitation",
            "hesitation and no execution", "lots of hesitation",
            "lots of missed opportunities", "missed my re-entries", "missed opportunities",
            "to many to count", "tons of missed opportunities", "no entries",
            "didn't execute on monday",
        ]),
        (0.9, [
            "didn't take it at first", "watched the whole trade i've wanted play-out",
            "didn't execute on", "missed", "hesitation",
        ]),
    ),
    _tag(
        "overtrading", "weakness", "med",
        "Multiple re-entries, taking too many trades",
        (1.0, [
            "multiple re-entries", "multi-fire after loss", "entered and exited multiple times",
            "don't multi fire trades", "over trading",
            "stopped out multiple times re-entering shorts in chop",
            "don't take the same trade and got stopped out on the same candle",
        ]),
        (0.9, ["too many L's"]),
    ),
    _tag(
        "process_error", "weakness", "low",
        "Trade copier issues, ATM mistakes, technical errors",
        (1.0, [
            "trade copier issues", "trade copier/ATM mistakes", "atm tool was acting up",
            "managed all 3 accounts individually", "pay attention to trade copier",
            "made a huge mistake on trade copier",
        ]),
        (0.9, ["process error"]),
    ),
]

CATALOG: Mapping[str, TagDefinition] = MappingProxyType(
    {definition.name: definition for definition in _DEFINITIONS}
)

STRENGTH_TAGS: tuple[str, ...] = tuple(
    name for name, definition in CATALOG.items() if definition.family == "strength"
)
WEAKNESS_TAGS: tuple[str, ...] = tuple(
    name for name, definition in CATALOG.items() if definition.family == "weakness"
)

STRENGTH_TAG_SET = frozenset(STRENGTH_TAGS)
WEAKNESS_TAG_SET = frozenset(WEAKNESS_TAGS)

VALID_SEVERITIES = ("low", "med", "high")


def get_definition(tag: str) -> TagDefinition | None:
    """Look up a tag definition by name."""
    return CATALOG.get(tag)


def is_known_tag(tag: str) -> bool:
    """Check whether a tag name belongs to the catalog."""
    return tag in CATALOG


def family_of(tag: str) -> TagFamily | None:
    """Get the family of a tag, or None for unknown tags."""
    if tag in STRENGTH_TAG_SET:
        return "strength"
    if tag in WEAKNESS_TAG_SET:
        return "weakness"
    return None


def severity_of(tag: str) -> Severity | None:
    """Get the fixed severity of a tag, or None for unknown tags."""
    definition = CATALOG.get(tag)
    return definition.severity if definition else None
