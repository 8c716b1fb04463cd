"""In-memory data stores for maintaining entity relationships."""

from milhas_ledger.store.ledger import LedgerDataStore

__all__ = ["LedgerDataStore"]
