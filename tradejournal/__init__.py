"""TradeJournal - behavioral analysis for trading journals."""

__version__ = "0.1.0"
