"""Configuration management for milhas-ledger.

Every setting has a default usable on a developer machine;
:meth:`LedgerConfig.from_env` overrides them from environment variables
and fails with :class:`ConfigurationError` on malformed values.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from milhas_ledger.exceptions import ConfigurationError
from milhas_ledger.models.arredondamento import ConfigArredondamento

LOG_FORMATS = ("standard", "json")


@dataclass
class KafkaConfig:
    """confluent-kafka producer settings for the events topic."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    client_id: str = "milhas-ledger"
    linger_ms: int = 5
    compression: str = "snappy"
    # Keeps per-account ordering across producer retries
    idempotent: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "client.id": self.client_id,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "enable.idempotence": self.idempotent,
        }


@dataclass
class OutputConfig:
    """Where exports and event logs are written."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False
    topic_prefix: str = "dev.milhas"


@dataclass
class ArredondamentoConfig:
    """Default scale of monetary results (cost removed, profit)."""

    casas_decimais_monetarias: int = 4

    def to_config(self) -> ConfigArredondamento:
        try:
            return ConfigArredondamento.com_casas_decimais(self.casas_decimais_monetarias)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc


@dataclass
class LedgerConfig:
    """Top-level settings of a ledger process."""

    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    arredondamento: ArredondamentoConfig = field(default_factory=ArredondamentoConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Build the configuration from ``os.environ``."""
        arredondamento = ArredondamentoConfig(_int_env("CASAS_DECIMAIS_MONETARIAS", 4))
        arredondamento.to_config()

        log_format = os.getenv("LOG_FORMAT", "standard")
        if log_format not in LOG_FORMATS:
            raise ConfigurationError(f"LOG_FORMAT must be 'standard' or 'json', got {log_format!r}")

        return cls(
            kafka=KafkaConfig(
                bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
                acks=os.getenv("KAFKA_ACKS", "all"),
            ),
            output=OutputConfig(
                json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
                pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
                topic_prefix=os.getenv("TOPIC_PREFIX", "dev.milhas"),
            ),
            arredondamento=arredondamento,
            seed=_int_env("SEED", None),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=log_format,
        )


def _int_env(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
