"""Main CLI entry point for TradeJournal.

This module provides the main click group and lazy loading
for heavy imports to improve startup time.
"""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

# Console for rich output
console = Console()


class LazyGroup(click.Group):
    """A click Group that lazily loads commands.
    
    This improves CLI startup time by only importing
    command modules when they are actually invoked.
    """

    def __init__(self, *args, lazy_subcommands: dict[str, str] | None = None, **kwargs):
        """Initialize the lazy group.
        
        Args:
            lazy_subcommands: Mapping of command names to module paths.
        """
        super().__init__(*args, **kwargs)
        self._lazy_subcommands = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """List all available commands."""
        base = super().list_commands(ctx)
        lazy = list(self._lazy_subcommands.keys())
        return sorted(set(base + lazy))

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, lazily loading if needed."""
        if cmd_name in self.commands:
            return self.commands[cmd_name]
        
        if cmd_name in self._lazy_subcommands:
            return self._lazy_load(cmd_name)
        
        return None

    def _lazy_load(self, cmd_name: str) -> click.Command:
        """Lazily load a command from its module path."""
        import importlib
        
        module_path = self._lazy_subcommands[cmd_name]
        module = importlib.import_module(module_path)
        
        # Command names can shadow builtins ("list", "import"), so match on
        # the click name rather than the attribute name.
        cmd = None
        for attr_name in dir(module):
            attr = getattr(module, attr_name)
            if isinstance(attr, click.Command) and attr.name == cmd_name:
                cmd = attr
                break
        
        if cmd is None:
            raise click.ClickException(f"Could not find command '{cmd_name}' in {module_path}")
        
        self.add_command(cmd)
        return cmd


# Define lazy subcommands mapping
LAZY_SUBCOMMANDS = {
    # Journal entries
    "import": "tradejournal.cli.journal",
    "add": "tradejournal.cli.journal",
    "list": "tradejournal.cli.journal",
    "show": "tradejournal.cli.journal",
    "delete": "tradejournal.cli.journal",
    # Analysis
    "analyze": "tradejournal.cli.analyze",
    "plan": "tradejournal.cli.analyze",
    "week": "tradejournal.cli.analyze",
    # Templates
    "template": "tradejournal.cli.templates",
}


CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _configure_logging(verbose: bool) -> None:
    """Route package logs through rich on stderr."""
    logger = logging.getLogger("tradejournal")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        )


@click.group(cls=LazyGroup, lazy_subcommands=LAZY_SUBCOMMANDS, context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="tradejournal")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """TradeJournal - behavioral analysis for your trading journal.
    
    Import free-text journal entries, detect strengths and weaknesses,
    track your process score and get a rule-based plan for the next
    session.
    
    \b
    Quick Start:
      tradejournal template daily-full   # Print a journal template
      tradejournal import journal.txt    # Parse, analyze and store entries
      tradejournal analyze               # Distributions and mean score
      tradejournal plan                  # Guardrails for the next session
    """
    _configure_logging(verbose)
    ctx.ensure_object(dict)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
