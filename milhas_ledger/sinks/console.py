"""Console sink for inspecting ledger output during development."""

from typing import Any

from milhas_ledger.sinks.serialization import to_json

LARGURA = 60


class ConsoleSink:
    """Print records as JSON on stdout."""

    def __init__(self, pretty: bool = True, max_records: int | None = None) -> None:
        """
        Parameters
        ----------
        pretty : bool
            Indent the JSON output.
        max_records : int | None
            Cap on records shown per batch; all when None.
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def write_record(self, topic: str, record: Any) -> None:
        print(f"[{topic}] {to_json(record, pretty=self.pretty)}")
        self._contar(topic, 1)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        _banner(f"Topic: {topic} ({len(records)} records)")

        visiveis = records if not self.max_records else records[: self.max_records]
        for record in visiveis:
            print(to_json(record, pretty=self.pretty))

        ocultos = len(records) - len(visiveis)
        if ocultos > 0:
            print(f"... and {ocultos} more records")
        self._contar(topic, len(records))

    def close(self) -> None:
        _banner("Console Sink Summary")
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} records")

    def _contar(self, topic: str, n: int) -> None:
        self._counts[topic] = self._counts.get(topic, 0) + n


def _banner(titulo: str) -> None:
    print("\n" + "=" * LARGURA)
    print(titulo)
    print("=" * LARGURA)
