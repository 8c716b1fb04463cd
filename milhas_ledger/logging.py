"""Logging setup for milhas-ledger.

Two output formats are supported: a pipe-separated text line for
terminals and one JSON object per line for log shippers. In JSON mode
the account context attached by the services (``tenant_id``,
``conta_id``, ``programa_id``) becomes top-level keys.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"

CONTEXT_FIELDS = ("tenant_id", "conta_id", "programa_id")
QUIET_LOGGERS = ("confluent_kafka", "faker")


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
    stream: IO[str] | None = None,
) -> None:
    """Install a single root handler for the ledger.

    Parameters
    ----------
    level : str
        Level name; unknown names fall back to INFO.
    format_type : str
        ``"standard"`` for text lines or ``"json"`` for JSON lines.
    stream : IO[str] | None
        Destination, stdout when omitted.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter
    if format_type == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(fmt=TEXT_FORMAT, datefmt=TEXT_DATEFMT)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(log_level)

    logging.getLogger("milhas_ledger").setLevel(log_level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def contexto_conta(conta: Any) -> dict[str, str]:
    """``extra`` mapping identifying the account a log line is about."""
    return {
        "tenant_id": conta.tenant_id,
        "conta_id": conta.id,
        "programa_id": conta.programa_id,
    }


class JsonFormatter(logging.Formatter):
    """Render records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for campo in CONTEXT_FIELDS:
            valor = getattr(record, campo, None)
            if valor is not None:
                payload[campo] = valor

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)
