"""Template commands for TradeJournal CLI."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from tradejournal.cli.common import date_option_type, fail, parse_date_option

console = Console()


@click.command("template")
@click.argument("template_id", required=False)
@click.option("--date", "template_date", type=date_option_type, default=None,
              help="Date to fill in (YYYY-MM-DD). Defaults to today.")
def show_template(template_id: Optional[str], template_date) -> None:
    """List journal templates or print one, ready to fill in.

    Templates use the section labels the importer understands.

    \b
    Examples:
      tradejournal template                       # List templates
      tradejournal template daily-full            # Print today's template
      tradejournal template quick-log > today.txt
    """
    from tradejournal.templates import JOURNAL_TEMPLATES, get_template, render_template

    if template_id is None:
        table = Table(title="Journal Templates", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="bold")
        table.add_column("Category")
        table.add_column("Description")
        for template in JOURNAL_TEMPLATES:
            table.add_row(template.id, template.category, template.description)
        console.print(table)
        return

    template = get_template(template_id)
    if template is None:
        available = ", ".join(t.id for t in JOURNAL_TEMPLATES)
        fail(f"Unknown template: {template_id}\n\nAvailable: {available}")

    # Plain echo so the output can be redirected into a file as-is
    click.echo(render_template(template, day=parse_date_option(template_date)))
