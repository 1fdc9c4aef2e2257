"""Journal entry templates.

Templates use the same section labels the parser looks for, so a filled-in
template parses back into structured fields.
"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel

TemplateCategory = Literal["daily", "trade", "weekly", "quick"]


class JournalTemplate(BaseModel):
    """A pre-formatted journal template."""

    id: str
    name: str
    description: str
    category: TemplateCategory
    body: str

    model_config = {"frozen": True}


JOURNAL_TEMPLATES = [
    JournalTemplate(
        id="daily-full",
        name="Daily Trading Journal (Full)",
        description="Complete daily journal with every section",
        category="daily",
        body="""Trading Journal - [DATE]

📊 Overall Conviction: [Bullish/Bearish/Neutral] - [why]

Setup Details:
📌 Entry: [e.g. retest of key level, candle closure above ORH]
📊 Position Size: [X] NQ/MNQ
💎 Risk: [X] points
🎯 Exit: [e.g. trailed stop, target hit, breakeven]

Execution:
Morning Session: [morning trades and execution quality]
Afternoon Session: [afternoon trades, if any]
Night Session: [overnight trades, if any]

Lessons Learned:
✅ [what went well]
❌ [what needs work]

Trade Management:
[trailing, scaling, exits]

Missed Opportunities:
[setups you saw but did not take, and why]

Final Thoughts:
[mindset and key takeaways]""",
    ),
    JournalTemplate(
        id="post-trade",
        name="Post-Trade Analysis",
        description="Short review right after closing a trade",
        category="trade",
        body="""Trade Analysis - [DATE] [TIME]

Setup: [setup]
Entry: [price] @ [time]
Exit: [price] @ [time]
PnL: $[amount] ([X]R)

What Worked:
✅ [what went well]

What Didn't:
❌ [what could have been better]

Lesson 1: [main takeaway from this trade]""",
    ),
    JournalTemplate(
        id="weekly-review",
        name="Weekly Review",
        description="End-of-week performance review",
        category="weekly",
        body="""Weekly Trading Review - Week of [DATE]

📈 Weekly Stats:
- Total P&L: $[amount]
- Win Rate: [X]%

🎯 Strengths This Week:
1. [top strength]
2. [second strength]

⚠️ Weaknesses This Week:
1. [top weakness]
2. [second weakness]

Key Lessons:
- [lesson]
- [lesson]

🎯 Focus for Next Week:
1. [primary focus]""",
    ),
    JournalTemplate(
        id="quick-log",
        name="Quick Trade Log",
        description="Minimal template for quick logging",
        category="quick",
        body="""Trading Journal - [DATE]

Conviction: [Bullish/Bearish/Neutral]

Trades:
1. [symbol] [long/short] @ [entry] -> [exit] | PnL: $[amount]

Lesson 1: [one main lesson from today]""",
    ),
]


def get_template(template_id: str) -> Optional[JournalTemplate]:
    """Get a template by id."""
    for template in JOURNAL_TEMPLATES:
        if template.id == template_id:
            return template
    return None


def templates_by_category(category: TemplateCategory) -> list[JournalTemplate]:
    """Get all templates in a category."""
    return [template for template in JOURNAL_TEMPLATES if template.category == category]


def render_template(
    template: JournalTemplate,
    day: Optional[date] = None,
    now: Optional[datetime] = None,
) -> str:
    """Fill in [DATE] and [TIME] placeholders.

    Args:
        template: Template to render.
        day: Date to insert. Defaults to today.
        now: Time to insert. Defaults to now.

    Returns:
        Template body with placeholders replaced.
    """
    day = day or date.today()
    now = now or datetime.now()
    date_text = f"{day.strftime('%B')} {day.day}, {day.year}"
    return template.body.replace("[DATE]", date_text).replace("[TIME]", now.strftime("%H:%M"))
