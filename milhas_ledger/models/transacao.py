"""Append-only record of a ledger transition."""

import uuid
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from milhas_ledger.exceptions import InvalidArgumentError
from milhas_ledger.models.enums import TipoTransacao
from milhas_ledger.models.validation import como_decimal, como_milhas, requerido


@dataclass(frozen=True)
class Transacao:
    """Immutable miles transaction.

    Transactions are never edited or removed once stored.
    """

    id: str
    conta_programa_id: str
    tipo: TipoTransacao
    milhas: int
    valor_brl: Decimal
    fonte: str | None
    observacao: str | None
    data: datetime | None = None
    criado_em: datetime | None = None

    def __post_init__(self) -> None:
        requerido(self.conta_programa_id, "conta_programa_id")
        requerido(self.tipo, "tipo")
        object.__setattr__(self, "tipo", TipoTransacao(self.tipo))
        como_milhas(self.milhas)
        if self.milhas <= 0:
            raise InvalidArgumentError("milhas deve ser positivo")

        valor = Decimal(0) if self.valor_brl is None else como_decimal(self.valor_brl, "valor_brl")
        object.__setattr__(self, "valor_brl", valor)
        agora = datetime.now()
        if self.data is None:
            object.__setattr__(self, "data", agora)
        if self.criado_em is None:
            object.__setattr__(self, "criado_em", agora)

    @classmethod
    def criar_compra(
        cls,
        conta_programa_id: str,
        milhas: int,
        valor: Decimal,
        fonte: str | None = None,
        observacao: str | None = None,
    ) -> "Transacao":
        return cls(str(uuid.uuid4()), conta_programa_id, TipoTransacao.COMPRA, milhas, valor, fonte, observacao)

    @classmethod
    def criar_bonus(
        cls,
        conta_programa_id: str,
        milhas: int,
        fonte: str | None = None,
        observacao: str | None = None,
    ) -> "Transacao":
        return cls(
            str(uuid.uuid4()), conta_programa_id, TipoTransacao.BONUS, milhas, Decimal(0), fonte, observacao
        )

    @classmethod
    def criar_venda(
        cls,
        conta_programa_id: str,
        milhas: int,
        valor: Decimal,
        observacao: str | None = None,
    ) -> "Transacao":
        return cls(str(uuid.uuid4()), conta_programa_id, TipoTransacao.VENDA, milhas, valor, None, observacao)
