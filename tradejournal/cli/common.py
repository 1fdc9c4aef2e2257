"""Helpers shared by TradeJournal CLI commands."""

import click
from rich.console import Console
from rich.panel import Panel

console = Console()

DATE_FORMATS = ["%Y-%m-%d"]


def get_config() -> dict:
    """Lazily load configuration."""
    from tradejournal.config import load_config

    return load_config()


def get_data_store(config: dict):
    """Get the journal store instance."""
    from tradejournal.config import get_db_path
    from tradejournal.db.store import JournalStore

    return JournalStore(get_db_path(config))


def fail(message: str) -> None:
    """Print an error panel and exit."""
    console.print(Panel(
        f"[red]{message}[/red]",
        title="[bold red]Error[/bold red]",
        border_style="red",
    ))
    raise SystemExit(1)


def score_color(score: float) -> str:
    """Rich color for a process score."""
    if score >= 70:
        return "green"
    if score >= 50:
        return "yellow"
    return "red"


def tag_label(tag: str) -> str:
    return tag.replace("_", " ")


def parse_date_option(value):
    """Date from a click.DateTime option value, or None."""
    return value.date() if value else None


date_option_type = click.DateTime(formats=DATE_FORMATS)
