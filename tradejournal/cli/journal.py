"""Journal entry commands for TradeJournal CLI.

Handles importing, adding, listing, showing and deleting entries.
"""

from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tradejournal.cli.analyze import render_analysis, run_analysis
from tradejournal.cli.common import (
    date_option_type,
    fail,
    get_config,
    get_data_store,
    parse_date_option,
    score_color,
    tag_label,
)
from tradejournal.models import JournalEntry

console = Console()


def _preview(text: str, width: int = 40) -> str:
    first_line = " ".join(text.split())
    return (first_line[:width - 3] + "...") if len(first_line) > width else first_line


def _tag_counts(entry: JournalEntry) -> tuple[int, int]:
    from tradejournal.analysis.catalog import family_of

    tags = entry.detected_tags or []
    strengths = sum(1 for tag in tags if family_of(tag.tag) == "strength")
    weaknesses = sum(1 for tag in tags if family_of(tag.tag) == "weakness")
    return strengths, weaknesses


def _save(store, entries: list[JournalEntry]) -> None:
    from tradejournal.db.store import JournalStoreError

    try:
        store.put_many(entries)
    except JournalStoreError as exc:
        fail(str(exc))


@click.command("import")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--ai/--no-ai", "use_ai", default=None, help="Use the AI classifier as well as keywords.")
@click.option("--dry-run", is_flag=True, help="Analyze without storing entries.")
def import_journal(file: Path, use_ai: Optional[bool], dry_run: bool) -> None:
    """Import journal entries from a text file.

    FILE may hold several entries, each starting with a heading like
    "Trading Journal - March 21, 2025".

    \b
    Examples:
      tradejournal import march.txt
      tradejournal import march.txt --ai
      tradejournal import march.txt --dry-run
    """
    from tradejournal.analysis.parser import parse_journal, to_journal_entries

    try:
        raw_text = file.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        fail(f"Could not read {file}: {exc}")

    parsed = parse_journal(raw_text)
    if not parsed:
        console.print(Panel(
            "[yellow]No journal entries found in file.[/yellow]\n\n"
            "Entries need a date heading and sections such as Conviction, "
            "Setup, Entry, Exit or Lessons Learned.",
            title="[bold]Import[/bold]",
            border_style="yellow",
        ))
        return

    config = get_config()
    result = run_analysis(to_journal_entries(parsed), config, use_ai)

    if not dry_run:
        _save(get_data_store(config), result.entries)
        console.print(f"[green]✓ Imported {len(result.entries)} entries[/green]")
    else:
        console.print(f"[yellow]Dry run: {len(result.entries)} entries not saved[/yellow]")

    render_analysis(result)


@click.command("add")
@click.option("--text", "-t", default=None, help="Entry text. Read from stdin if omitted.")
@click.option("--date", "entry_date", type=date_option_type, default=None,
              help="Entry date (YYYY-MM-DD). Detected from the text if omitted.")
@click.option("--trade-id", "trade_ids", multiple=True, help="Associated trade id (repeatable).")
@click.option("--ai/--no-ai", "use_ai", default=None, help="Use the AI classifier as well as keywords.")
def add_entry(text: Optional[str], entry_date, trade_ids: tuple[str, ...], use_ai: Optional[bool]) -> None:
    """Add a single journal entry.

    \b
    Examples:
      tradejournal add --text "Waited for close, took SL once"
      tradejournal add --date 2025-03-21 < today.txt
    """
    from tradejournal.analysis.parser import extract_date

    if text is None:
        text = click.get_text_stream("stdin").read()
    text = text.strip()
    if not text:
        fail("Journal entry text is empty.")

    day = parse_date_option(entry_date)
    if day is None:
        try:
            day = date.fromisoformat(extract_date(text))
        except ValueError:
            day = date.today()

    entry = JournalEntry(
        date=day,
        content=text,
        trade_ids=list(trade_ids),
        created_at=datetime.now(),
    )

    config = get_config()
    analyzed = run_analysis([entry], config, use_ai).entries[0]
    _save(get_data_store(config), [analyzed])

    color = score_color(analyzed.process_score)
    strengths, weaknesses = _tag_counts(analyzed)
    console.print(Panel(
        f"[bold]ID:[/bold] {analyzed.id}\n"
        f"[bold]Date:[/bold] {analyzed.date.isoformat()}\n"
        f"[bold]Process score:[/bold] [{color}]{analyzed.process_score}[/{color}]\n"
        f"[bold]Tags:[/bold] [green]{strengths} strengths[/green], "
        f"[red]{weaknesses} weaknesses[/red]",
        title="[bold green]Entry Added[/bold green]",
        border_style="green",
    ))


@click.command("list")
@click.option("--days", "-d", type=int, default=None, help="Only show the last N days.")
def list_entries(days: Optional[int]) -> None:
    """List stored journal entries.

    \b
    Examples:
      tradejournal list
      tradejournal list --days 7
    """
    config = get_config()
    store = get_data_store(config)

    from_date = date.today() - timedelta(days=days) if days else None
    entries = store.get_all(from_date=from_date)

    if not entries:
        console.print(Panel(
            "[dim]No journal entries found[/dim]",
            title="[bold]Journal[/bold]",
            border_style="dim",
        ))
        return

    table = Table(title="Journal Entries", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Date", style="bold")
    table.add_column("Score", justify="right")
    table.add_column("Str", justify="right")
    table.add_column("Weak", justify="right")
    table.add_column("Entry", max_width=40)

    for entry in entries:
        strengths, weaknesses = _tag_counts(entry)
        if entry.process_score is None:
            score = "[dim]-[/dim]"
        else:
            color = score_color(entry.process_score)
            score = f"[{color}]{entry.process_score}[/{color}]"
        table.add_row(
            entry.id,
            entry.date.isoformat(),
            score,
            f"[green]{strengths}[/green]",
            f"[red]{weaknesses}[/red]",
            _preview(entry.content),
        )

    console.print(table)


@click.command("show")
@click.argument("entry_id")
def show_entry(entry_id: str) -> None:
    """Show one journal entry with its parsed fields and tags.

    \b
    Examples:
      tradejournal show journal-3f2a...
    """
    from tradejournal.analysis.catalog import family_of
    from tradejournal.analysis.parser import parse_block

    config = get_config()
    entry = get_data_store(config).get(entry_id)
    if entry is None:
        fail(f"Journal entry not found: {entry_id}")

    parsed = parse_block(entry.content, today=entry.date)

    details = [
        f"[bold]Date:[/bold] {entry.date.isoformat()}",
        f"[bold]Process score:[/bold] "
        + (str(entry.process_score) if entry.process_score is not None else "not analyzed"),
    ]
    if entry.trade_ids:
        details.append(f"[bold]Trades:[/bold] {', '.join(entry.trade_ids)}")
    if parsed.conviction:
        details.append(f"[bold]Conviction:[/bold] {parsed.conviction}")
    for label, value in (
        ("Entry", parsed.setup.entry),
        ("Size", parsed.setup.position_size),
        ("Risk", parsed.setup.risk),
        ("Exit", parsed.setup.exit),
    ):
        if value:
            details.append(f"[bold]{label}:[/bold] {value}")
    for session, notes in parsed.sessions.items():
        details.append(f"[bold]{session.title()} session:[/bold] {notes}")
    if parsed.lessons:
        details.append("[bold]Lessons:[/bold]")
        details.extend(f"  • {lesson}" for lesson in parsed.lessons)

    console.print(Panel("\n".join(details), title=f"[bold]{entry.id}[/bold]", border_style="cyan"))

    if entry.detected_tags:
        table = Table(title="Detected Tags", show_header=True, header_style="bold cyan")
        table.add_column("Tag", style="bold")
        table.add_column("Type")
        table.add_column("Severity")
        table.add_column("Confidence", justify="right")
        table.add_column("Matched", max_width=40)
        for tag in entry.detected_tags:
            family = family_of(tag.tag)
            color = "green" if family == "strength" else "red"
            table.add_row(
                tag_label(tag.tag),
                f"[{color}]{family}[/{color}]",
                tag.severity,
                f"{tag.confidence:.2f}",
                ", ".join(tag.matched_phrases),
            )
        console.print(table)


@click.command("delete")
@click.argument("entry_id")
def delete_entry(entry_id: str) -> None:
    """Delete a journal entry by id.

    \b
    Examples:
      tradejournal delete journal-3f2a...
    """
    from tradejournal.db.store import JournalStoreError

    config = get_config()
    store = get_data_store(config)

    try:
        removed = store.delete(entry_id)
    except JournalStoreError as exc:
        fail(str(exc))

    if not removed:
        fail(f"Journal entry not found: {entry_id}")

    console.print(f"[green]✓ Deleted entry {entry_id}[/green]")
