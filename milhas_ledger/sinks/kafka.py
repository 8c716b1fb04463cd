"""Kafka sink for ledger events.

Records are published as UTF-8 JSON. The message key is the id of the
account the record belongs to, so every transition of one account is
written to the same partition and consumed in log order.
"""

import json
import logging
from dataclasses import dataclass, field, is_dataclass
from typing import Any

from confluent_kafka import KafkaException, Producer

from milhas_ledger.config import KafkaConfig
from milhas_ledger.exceptions import SinkError
from milhas_ledger.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

# Checked in order: Event, Transacao, ContaPrograma
KEY_FIELDS = ("subject", "conta_programa_id", "id")


@dataclass
class DeliveryStats:
    """Counters fed by the producer's delivery reports."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    por_topico: dict[str, int] = field(default_factory=dict)

    @property
    def pending(self) -> int:
        return self.sent - self.delivered - self.failed

    @property
    def success_rate(self) -> float:
        reported = self.delivered + self.failed
        return self.delivered / reported if reported else 0.0


def message_key(record: Any) -> str | None:
    """Account id of a record, or None when it carries none."""
    if is_dataclass(record) and not isinstance(record, type):
        values = [getattr(record, name, None) for name in KEY_FIELDS]
    elif isinstance(record, dict):
        values = [record.get(name) for name in KEY_FIELDS]
    else:
        return None

    for value in values:
        if value:
            return str(value)
    return None


class KafkaSink:
    """Publish ledger records to Kafka with a confluent-kafka ``Producer``."""

    def __init__(self, config: KafkaConfig | str) -> None:
        """Create the producer.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer settings, or just the bootstrap servers.
        """
        self.config = KafkaConfig(bootstrap_servers=config) if isinstance(config, str) else config
        self.producer = Producer(self.config.to_dict())
        self.stats = DeliveryStats()

    def _on_delivery(self, err: Any, msg: Any) -> None:
        if err:
            self.stats.failed += 1
            logger.error("Evento nao entregue: %s", err)
            return
        self.stats.delivered += 1
        logger.debug("Evento entregue em %s[%d]@%d", msg.topic(), msg.partition(), msg.offset())

    def send(self, topic: str, record: Any, key: str | None = None) -> None:
        """Queue one record; delivery is reported asynchronously."""
        payload = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")
        key = key or message_key(record)

        try:
            self.producer.produce(
                topic=topic,
                key=key.encode("utf-8") if key else None,
                value=payload,
                callback=self._on_delivery,
            )
        except (BufferError, KafkaException) as exc:
            raise SinkError(f"Falha ao produzir em {topic}: {exc}") from exc

        self.stats.sent += 1
        self.stats.por_topico[topic] = self.stats.por_topico.get(topic, 0) + 1
        # Serve delivery callbacks of earlier messages
        self.producer.poll(0)

    def write_record(self, topic: str, record: Any) -> None:
        self.send(topic, record)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        for record in records:
            self.send(topic, record)
        self.flush()
        logger.info("Lote publicado em %s: %d registros", topic, len(records))

    def flush(self, timeout: float = 30.0) -> int:
        """Wait for outstanding deliveries; returns how many are still queued."""
        remaining = self.producer.flush(timeout)
        if remaining:
            logger.warning("%d mensagens ainda pendentes apos flush", remaining)
        return remaining

    def close(self) -> None:
        self.flush()
        logger.info(
            "Kafka sink encerrado: enviados=%d, entregues=%d, falhas=%d",
            self.stats.sent,
            self.stats.delivered,
            self.stats.failed,
        )
