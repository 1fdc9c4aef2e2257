"""Analysis commands for TradeJournal CLI.

Handles re-analysis of stored entries, daily plans and weekly summaries.
"""

import asyncio
from datetime import date, timedelta
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.common import (
    date_option_type,
    fail,
    get_config,
    get_data_store,
    parse_date_option,
    score_color,
    tag_label,
)
from tradejournal.models import DailyPlan, JournalAnalysis, TagShare, WeekSummary

console = Console()


def build_classifier(config: dict, use_ai: Optional[bool]):
    """Create the AI classifier if requested and configured.

    Args:
        config: Application config.
        use_ai: Explicit CLI choice; None defers to the config file.

    Returns:
        AgentTagClassifier or None for rule-engine-only analysis.
    """
    from tradejournal.config import get_analysis_settings, get_openai_model

    if use_ai is None:
        use_ai = bool(get_analysis_settings(config)["use_ai"])
    if not use_ai:
        return None

    from tradejournal.agents.classifier import AgentTagClassifier

    if not AgentTagClassifier.is_available():
        console.print(
            "[yellow]OPENAI_API_KEY not set, using keyword analysis only.[/yellow]"
        )
        return None
    return AgentTagClassifier(model=get_openai_model(config))


def run_analysis(entries, config: dict, use_ai: Optional[bool]) -> JournalAnalysis:
    """Run the analysis pipeline with configured batching."""
    from tradejournal.analysis.pipeline import analyze_entries
    from tradejournal.config import get_analysis_settings

    settings = get_analysis_settings(config)
    classifier = build_classifier(config, use_ai)

    if classifier is not None:
        with console.status(f"[bold]Classifying {len(entries)} entries...[/bold]"):
            return asyncio.run(analyze_entries(
                entries,
                classifier=classifier,
                batch_size=int(settings["batch_size"]),
                delay=float(settings["delay_seconds"]),
                timeout=float(settings["timeout_seconds"]),
            ))
    return asyncio.run(analyze_entries(entries))


# ==================== Rendering ====================

def _distribution_table(title: str, shares: list[TagShare], color: str) -> Table:
    table = Table(title=title, show_header=True, header_style=f"bold {color}")
    table.add_column("Tag", style="bold")
    table.add_column("Share", justify="right")
    table.add_column("Weight", justify="right")
    table.add_column("Hits", justify="right")
    for share in shares:
        table.add_row(
            tag_label(share.tag),
            f"{share.percentage:.1f}%",
            str(share.count),
            str(share.occurrences),
        )
    return table


def render_plan(plan: DailyPlan) -> None:
    """Print a daily plan panel."""
    def flag(value: bool) -> str:
        return "[green]ON[/green]" if value else "[dim]off[/dim]"

    lines = [
        f"[bold]Risk Cap:[/bold]      {plan.risk_cap}",
        f"[bold]Max Stop:[/bold]      {plan.max_stop}",
        f"[bold]Sizing:[/bold]        {plan.sizing_ladder}",
        "",
        f"Two-strike rule:      {flag(plan.two_strike_rule)}",
        f"No first 5 min:       {flag(plan.no_first_5_min)}",
        f"No data candle:       {flag(plan.no_data_candle)}",
        f"Retest entries only:  {flag(plan.retest_only)}",
        f"BE after structure:   {flag(plan.be_after_structure)}",
        f"Chop filter:          {flag(plan.chop_filter)}",
        f"Bias flip protocol:   {flag(plan.bias_flip_protocol)}",
    ]
    if plan.custom_reminders:
        lines.append("")
        lines.append("[bold]Reminders:[/bold]")
        lines.extend(f"  {reminder}" for reminder in plan.custom_reminders)

    console.print(Panel(
        "\n".join(lines),
        title=f"[bold]Plan for {plan.date.isoformat()}[/bold]",
        border_style="cyan",
    ))


def render_analysis(result: JournalAnalysis) -> None:
    """Print distributions, mean score and plan."""
    score = result.average_process_score
    color = score_color(score)
    console.print(Panel(
        f"[bold]Entries analyzed:[/bold] {len(result.entries)}\n"
        f"[bold]Average process score:[/bold] [{color}]{score:.1f}[/{color}]",
        title="[bold]Journal Analysis[/bold]",
        border_style=color,
    ))

    if result.distribution.strengths:
        console.print(_distribution_table("Strengths", result.distribution.strengths, "green"))
    else:
        console.print("[dim]No strengths detected[/dim]")

    if result.distribution.weaknesses:
        console.print(_distribution_table("Weaknesses", result.distribution.weaknesses, "red"))
    else:
        console.print("[dim]No weaknesses detected[/dim]")

    render_plan(result.weekly_plan)


def render_week(summary: WeekSummary) -> None:
    """Print a week summary."""
    table = Table(
        title=f"Week {summary.start_date.isoformat()} to {summary.end_date.isoformat()}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("Date", style="bold")
    table.add_column("Entries", justify="right")
    table.add_column("Score", justify="right")
    table.add_column("Strengths", justify="right")
    table.add_column("Weaknesses", justify="right")

    for day in summary.days:
        color = score_color(day.process_score)
        table.add_row(
            day.date.isoformat(),
            str(len(day.entries)),
            f"[{color}]{day.process_score}[/{color}]",
            f"[green]{day.strength_count}[/green]",
            f"[red]{day.weakness_count}[/red]",
        )
    console.print(table)

    top_weaknesses = sorted(
        ((tag, count) for tag, count in summary.weakness_breakdown.items() if count),
        key=lambda item: item[1],
        reverse=True,
    )
    console.print(
        f"\n[bold]Strengths:[/bold] {summary.strength_percentage:.1f}% "
        f"(weighted {summary.weighted_strength_score}) | "
        f"[bold]Weaknesses:[/bold] {summary.weakness_percentage:.1f}% "
        f"(weighted {summary.weighted_weakness_score})"
    )
    if top_weaknesses:
        console.print(
            "[bold]Most frequent weaknesses:[/bold] "
            + ", ".join(f"{tag_label(tag)} ({count})" for tag, count in top_weaknesses[:3])
        )


def _ensure_analyzed(entries):
    """Rule-engine tags for entries that were never analyzed."""
    from tradejournal.analysis.pipeline import analyze_entry

    return [entry if entry.detected_tags is not None else analyze_entry(entry) for entry in entries]


# ==================== Commands ====================

@click.command("analyze")
@click.option("--ai/--no-ai", "use_ai", default=None, help="Use the AI classifier as well as keywords.")
@click.option("--save/--no-save", default=True, show_default=True, help="Store refreshed tags and scores.")
@click.option("--days", "-d", type=int, default=None, help="Only analyze the last N days.")
def analyze(use_ai: Optional[bool], save: bool, days: Optional[int]) -> None:
    """Re-analyze stored journal entries.

    Detects behavioral tags for every entry, recomputes process scores
    and shows strength/weakness distributions and a plan.

    \b
    Examples:
      tradejournal analyze             # Keyword analysis of all entries
      tradejournal analyze --ai        # Add AI classification
      tradejournal analyze --days 7    # Last week only
    """
    config = get_config()
    store = get_data_store(config)

    from_date = date.today() - timedelta(days=days) if days else None
    entries = store.get_all(from_date=from_date)

    if not entries:
        console.print(Panel(
            "[dim]No journal entries found[/dim]\n\n"
            "Run [cyan]tradejournal import FILE[/cyan] to add some.",
            title="[bold]Journal Analysis[/bold]",
            border_style="dim",
        ))
        return

    result = run_analysis(entries, config, use_ai)

    if save:
        from tradejournal.db.store import JournalStoreError

        try:
            store.put_many(result.entries)
        except JournalStoreError as exc:
            fail(str(exc))

    render_analysis(result)


@click.command("plan")
@click.option("--date", "plan_date", type=date_option_type, default=None,
              help="Plan date (YYYY-MM-DD). Defaults to today.")
def plan(plan_date) -> None:
    """Show the rule-based plan for a trading day.

    Looks at weaknesses in your 10 most recent entries up to the plan
    date and turns on the matching guardrails.

    \b
    Examples:
      tradejournal plan
      tradejournal plan --date 2025-03-24
    """
    from tradejournal.analysis.plan import generate_daily_plan

    config = get_config()
    store = get_data_store(config)

    as_of = parse_date_option(plan_date) or date.today()
    entries = _ensure_analyzed(store.get_all(to_date=as_of))
    render_plan(generate_daily_plan(entries, as_of))


@click.command("week")
@click.option("--start", "start_date", type=date_option_type, default=None,
              help="First day of the week (YYYY-MM-DD). Defaults to this Monday.")
def week(start_date) -> None:
    """Summarize one week of journal entries.

    \b
    Examples:
      tradejournal week
      tradejournal week --start 2025-03-17
    """
    from tradejournal.analysis.aggregate import summarize_week

    config = get_config()
    store = get_data_store(config)

    start = parse_date_option(start_date)
    if start is None:
        today = date.today()
        start = today - timedelta(days=today.weekday())
    end = start + timedelta(days=6)

    entries = _ensure_analyzed(store.get_all(from_date=start, to_date=end))
    if not entries:
        console.print(Panel(
            f"[dim]No journal entries between {start.isoformat()} and {end.isoformat()}[/dim]",
            title="[bold]Week Summary[/bold]",
            border_style="dim",
        ))
        return

    render_week(summarize_week(start, end, entries))
