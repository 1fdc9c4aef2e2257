"""Persistence for TradeJournal."""

from tradejournal.db.store import JournalStore, JournalStoreError

__all__ = ["JournalStore", "JournalStoreError"]
