"""Program account with weighted-average cost tracking.

Each account is one ledger per (tenant, programa, owner). It is an
immutable value: the three transitions return a new ``ContaPrograma``
and leave the receiver untouched.

- COMPRA: +milhas, +custo base, recalcula custo medio
- BONUS: +milhas, custo base inalterado, recalcula custo medio (dilui)
- VENDA: -milhas, -custo base proporcional, custo medio inalterado

The average cost per thousand miles ("milheiro") is always derived from
the balance and cost basis::

    custo_medio = custo_base / (saldo / 1000)
"""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal
from typing import Any

from milhas_ledger.exceptions import (
    InsufficientBalanceError,
    InvalidArgumentError,
    InvariantViolationError,
)
from milhas_ledger.models.arredondamento import ESCALA_CUSTO_MEDIO, ConfigArredondamento
from milhas_ledger.models.validation import (
    como_decimal,
    como_milhas,
    requerido,
    texto_nao_vazio,
)

MILHEIRO = Decimal(1000)
ZERO = Decimal(0)


@dataclass(frozen=True)
class ContaPrograma:
    """Loyalty program account ledger.

    The constructor is the rehydration path: it rejects states that break
    the ledger invariants instead of coercing them. Use :meth:`criar` for
    new accounts.
    """

    id: str
    tenant_id: str
    programa_id: str
    programa_nome: str
    owner: str
    saldo_milhas: int
    custo_base_total_brl: Decimal
    custo_medio_milheiro_atual: Decimal
    criado_em: datetime
    atualizado_em: datetime

    def __post_init__(self) -> None:
        for nome in ("id", "tenant_id", "programa_id", "programa_nome", "owner", "criado_em", "atualizado_em"):
            requerido(getattr(self, nome), nome)
        como_milhas(self.saldo_milhas, "saldo_milhas")

        for nome in ("custo_base_total_brl", "custo_medio_milheiro_atual"):
            valor = getattr(self, nome)
            object.__setattr__(self, nome, ZERO if valor is None else como_decimal(valor, nome))

        if self.saldo_milhas < 0:
            raise InvariantViolationError("saldo_milhas nao pode ser negativo")
        if self.custo_base_total_brl < 0:
            raise InvariantViolationError("custo_base_total_brl nao pode ser negativo")
        if self.custo_medio_milheiro_atual < 0:
            raise InvariantViolationError("custo_medio_milheiro_atual nao pode ser negativo")
        if self.saldo_milhas == 0 and self.custo_base_total_brl != 0:
            raise InvariantViolationError(
                "custo_base_total_brl deve ser zero quando saldo_milhas eh zero"
            )

    @classmethod
    def criar(
        cls,
        tenant_id: str,
        programa_id: str,
        programa_nome: str,
        owner: str,
    ) -> "ContaPrograma":
        """Create a new account with zero balance and zero cost basis."""
        requerido(tenant_id, "tenant_id")
        requerido(programa_id, "programa_id")
        nome = texto_nao_vazio(programa_nome, "programa_nome")
        dono = texto_nao_vazio(owner, "owner")

        agora = datetime.now()
        return cls(
            id=str(uuid.uuid4()),
            tenant_id=tenant_id,
            programa_id=programa_id,
            programa_nome=nome,
            owner=dono,
            saldo_milhas=0,
            custo_base_total_brl=ZERO,
            custo_medio_milheiro_atual=ZERO,
            criado_em=agora,
            atualizado_em=agora,
        )

    def aplicar_compra(self, milhas: int, valor: Any) -> "ContaPrograma":
        """Apply a purchase: more miles, more cost basis, new average.

        ``valor`` joins the cost basis exactly; only sales round money.
        """
        _exigir_positivo(milhas, "compra")
        valor = _valor_nao_negativo(valor, "valor")

        novo_saldo = self.saldo_milhas + milhas
        novo_custo_base = self.custo_base_total_brl + valor
        return self._com_saldo(novo_saldo, novo_custo_base)

    def aplicar_bonus(self, milhas: int) -> "ContaPrograma":
        """Apply free miles (cashback, promotions): average cost is diluted."""
        _exigir_positivo(milhas, "bonus")

        return self._com_saldo(self.saldo_milhas + milhas, self.custo_base_total_brl)

    def aplicar_venda(
        self,
        milhas: int,
        valor_venda: Any,
        arredondamento: ConfigArredondamento | None = None,
    ) -> "ResultadoVenda":
        """Apply a sale, removing cost basis proportionally to the miles sold.

        Parameters
        ----------
        milhas : int
            Miles sold; must be positive and not exceed the balance.
        valor_venda : Decimal
            Proceeds of the sale in BRL.
        arredondamento : ConfigArredondamento | None
            Rounding for the removed cost; defaults to
            ``ConfigArredondamento.DEFAULT`` (4 places, half-up).

        Returns
        -------
        ResultadoVenda
            Updated account, cost removed and realized profit (negative on loss).

        Raises
        ------
        InsufficientBalanceError
            If ``milhas`` exceeds the current balance.
        """
        _exigir_positivo(milhas, "venda")
        valor_venda = _valor_nao_negativo(valor_venda, "valor_venda")
        if milhas > self.saldo_milhas:
            raise InsufficientBalanceError(self.programa_id, self.saldo_milhas, milhas)

        config = arredondamento or ConfigArredondamento.DEFAULT
        if milhas == self.saldo_milhas:
            custo_removido = self.custo_base_total_brl
        else:
            proporcional = self.custo_base_total_brl * milhas / self.saldo_milhas
            # Rounding up may overshoot a sub-cent base
            custo_removido = min(config.arredondar(proporcional), self.custo_base_total_brl)

        novo_saldo = self.saldo_milhas - milhas
        novo_custo_base = self.custo_base_total_brl - custo_removido
        if novo_saldo == 0:
            novo_custo_base = ZERO

        return ResultadoVenda(
            conta_atualizada=self._com_saldo(novo_saldo, novo_custo_base),
            custo_removido=custo_removido,
            lucro=valor_venda - custo_removido,
        )

    def tem_saldo(self) -> bool:
        return self.saldo_milhas > 0

    def pode_sacar(self, milhas: int) -> bool:
        return milhas > 0 and milhas <= self.saldo_milhas

    def _com_saldo(self, saldo: int, custo_base: Decimal) -> "ContaPrograma":
        return replace(
            self,
            saldo_milhas=saldo,
            custo_base_total_brl=custo_base,
            custo_medio_milheiro_atual=calcular_custo_medio(saldo, custo_base),
            atualizado_em=datetime.now(),
        )


@dataclass(frozen=True)
class ResultadoVenda:
    """Outcome of a sale transition (not persisted)."""

    conta_atualizada: ContaPrograma
    custo_removido: Decimal
    lucro: Decimal

    @property
    def eh_prejuizo(self) -> bool:
        return self.lucro < 0


def calcular_custo_medio(saldo: int, custo_base: Decimal) -> Decimal:
    """Average cost per thousand miles, 6 places half-up; zero when empty."""
    if saldo == 0 or custo_base == 0:
        return ZERO
    return ESCALA_CUSTO_MEDIO.arredondar(custo_base * MILHEIRO / saldo)


def _exigir_positivo(milhas: Any, operacao: str) -> None:
    como_milhas(milhas)
    if milhas <= 0:
        raise InvalidArgumentError(f"milhas deve ser positivo para {operacao}")


def _valor_nao_negativo(valor: Any, nome: str) -> Decimal:
    valor = como_decimal(valor, nome)
    if valor < 0:
        raise InvalidArgumentError(f"{nome} nao pode ser negativo")
    return valor
