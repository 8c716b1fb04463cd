"""Miles lot: one recorded acquisition (program, quantity, value)."""

from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal

from milhas_ledger.exceptions import InvalidArgumentError
from milhas_ledger.models.arredondamento import ConfigArredondamento
from milhas_ledger.models.enums import TipoProgramaMilhas
from milhas_ledger.models.validation import como_decimal, como_milhas, requerido

MILHEIRO = Decimal(1000)
ESCALA_MILHEIROS = ConfigArredondamento(6, ROUND_HALF_UP)
ESCALA_PRECO = ConfigArredondamento(4, ROUND_HALF_UP)


@dataclass(frozen=True)
class Milhas:
    """Miles balance entry for a loyalty program.

    Invariants:
    - programa cannot be None
    - quantidade must be positive
    - valor cannot be None
    """

    id: str | None
    programa: TipoProgramaMilhas
    quantidade: int
    valor: Decimal

    def __post_init__(self) -> None:
        requerido(self.programa, "programa")
        object.__setattr__(self, "programa", TipoProgramaMilhas(self.programa))
        object.__setattr__(self, "valor", como_decimal(self.valor, "valor"))
        como_milhas(self.quantidade, "quantidade")
        if self.quantidade <= 0:
            raise InvalidArgumentError("quantidade deve ser positiva")

    @classmethod
    def criar(cls, programa: TipoProgramaMilhas, quantidade: int, valor: Decimal) -> "Milhas":
        """New lot without an id (assigned when stored)."""
        return cls(None, programa, quantidade, valor)

    @classmethod
    def com_id_novo(
        cls, id: str, programa: TipoProgramaMilhas, quantidade: int, valor: Decimal
    ) -> "Milhas":
        requerido(id, "id")
        return cls(id, programa, quantidade, valor)

    def preco_por_milheiro(self) -> Decimal:
        """Price per 1000 miles with 4 decimal places."""
        milheiros = ESCALA_MILHEIROS.arredondar(Decimal(self.quantidade) / MILHEIRO)
        return ESCALA_PRECO.arredondar(self.valor / milheiros)

    def com_quantidade(self, nova_quantidade: int) -> "Milhas":
        return replace(self, quantidade=nova_quantidade)

    def com_valor(self, novo_valor: Decimal) -> "Milhas":
        return replace(self, valor=novo_valor)

    def com_id(self, novo_id: str) -> "Milhas":
        requerido(novo_id, "id")
        return replace(self, id=novo_id)
