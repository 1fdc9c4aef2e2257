"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including journal import, entry management, analysis and plans.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
