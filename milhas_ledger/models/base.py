"""Event envelope written to sinks after each ledger transition."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Event:
    """One published fact about an account.

    ``subject`` is the account id, so a keyed sink keeps every event of an
    account on the same partition.
    """

    event_id: str
    event_type: str  # entidade.acao, e.g. transacao.venda
    event_time: datetime
    source: str
    subject: str
    data: dict
    metadata: dict = field(default_factory=dict)

    @classmethod
    def criar(
        cls,
        event_type: str,
        source: str,
        subject: str,
        data: dict,
        metadata: dict | None = None,
        event_time: datetime | None = None,
    ) -> "Event":
        return cls(
            event_id=str(uuid.uuid4()),
            event_type=event_type,
            event_time=event_time or datetime.now(),
            source=source,
            subject=subject,
            data=data,
            metadata=metadata or {},
        )

    @property
    def tenant_id(self) -> str | None:
        return self.metadata.get("tenant_id")
