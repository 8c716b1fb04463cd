"""JSON-ready conversion of ledger records.

Money stays a string (``"23.333333"``) so that consumers never see a
binary float version of a Decimal amount.
"""

import json
from dataclasses import fields, is_dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID


def to_dict(record: Any) -> dict:
    """Top-level mapping for one record (dataclass, mapping or scalar)."""
    if is_dataclass(record) and not isinstance(record, type):
        return _campos(record)
    if isinstance(record, dict):
        return serialize_value(record)
    return {"value": str(record)}


def to_json(record: Any, pretty: bool = False) -> str:
    return json.dumps(to_dict(record), indent=2 if pretty else None, ensure_ascii=False, default=str)


def serialize_value(value: Any) -> Any:
    """Convert one value, recursing into containers and nested dataclasses."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (Decimal, UUID)):
        return str(value)
    # datetime is a date subclass
    if isinstance(value, date):
        return value.isoformat()
    if is_dataclass(value) and not isinstance(value, type):
        return _campos(value)
    if isinstance(value, dict):
        return {chave: serialize_value(item) for chave, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(item) for item in value]
    return value


def _campos(record: Any) -> dict:
    return {f.name: serialize_value(getattr(record, f.name)) for f in fields(record)}
