"""Common interface of event sinks."""

from typing import Any, Protocol


class LedgerSink(Protocol):
    """Destination for ledger events and exported records."""

    def write_record(self, topic: str, record: Any) -> None:
        """Write one record as soon as it is produced."""

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Write a batch of records."""

    def close(self) -> None:
        """Flush pending output and release resources."""
