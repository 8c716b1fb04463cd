"""Multi-tenant miles ledger with weighted-average cost tracking."""

__version__ = "0.1.0"
