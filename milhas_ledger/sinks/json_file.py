"""JSON file sink for exporting ledger data to files."""

import json
import logging
from pathlib import Path
from typing import Any

from milhas_ledger.exceptions import SinkError
from milhas_ledger.sinks.serialization import to_dict

logger = logging.getLogger(__name__)


class JsonFileSink:
    """Output data to JSON files.

    Batches go to ``<topic>.json`` (overwritten); single records are
    appended to ``<topic>.jsonl`` so the event log grows line by line.
    """

    def __init__(self, output_dir: str | Path, pretty: bool = False) -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON files.
        pretty : bool
            Pretty-print JSON batch output.
        """
        self.output_dir = Path(output_dir)
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SinkError(f"Cannot create output dir {self.output_dir}: {exc}") from exc
        self.pretty = pretty
        self._counts: dict[str, int] = {}

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Write a batch of records to a JSON file."""
        file_path = self.output_dir / f"{_file_stem(topic)}.json"
        data = [to_dict(record) for record in records]

        try:
            with open(file_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2 if self.pretty else None, ensure_ascii=False, default=str)
        except OSError as exc:
            raise SinkError(f"Failed writing {file_path}: {exc}") from exc

        self._counts[topic] = len(records)

    def write_record(self, topic: str, record: Any) -> None:
        """Append one record to the topic's JSON Lines file."""
        file_path = self.output_dir / f"{_file_stem(topic)}.jsonl"
        line = json.dumps(to_dict(record), ensure_ascii=False, default=str)

        try:
            with open(file_path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as exc:
            raise SinkError(f"Failed appending to {file_path}: {exc}") from exc

        self._counts[topic] = self._counts.get(topic, 0) + 1

    def close(self) -> None:
        """Log summary."""
        logger.info("JSON files written to: %s", self.output_dir)
        for topic, count in self._counts.items():
            logger.info("  %s: %d records", topic, count)


def _file_stem(topic: str) -> str:
    # dev.milhas.transacoes -> dev_milhas_transacoes
    return topic.replace(".", "_").replace("-", "_")
