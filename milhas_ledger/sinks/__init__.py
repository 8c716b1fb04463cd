"""Output sinks for ledger events and exports."""

from milhas_ledger.sinks.base import LedgerSink
from milhas_ledger.sinks.console import ConsoleSink
from milhas_ledger.sinks.json_file import JsonFileSink
from milhas_ledger.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink", "LedgerSink"]
