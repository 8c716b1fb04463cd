"""Rounding configuration for monetary and average-cost figures."""

import decimal
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import ClassVar

from milhas_ledger.exceptions import InvalidArgumentError, NullArgumentError

MODOS_ARREDONDAMENTO = frozenset(
    {
        decimal.ROUND_UP,
        decimal.ROUND_DOWN,
        decimal.ROUND_CEILING,
        decimal.ROUND_FLOOR,
        decimal.ROUND_HALF_UP,
        decimal.ROUND_HALF_DOWN,
        decimal.ROUND_HALF_EVEN,
        decimal.ROUND_05UP,
    }
)

CASAS_DECIMAIS_MIN = 0
CASAS_DECIMAIS_MAX = 6


@dataclass(frozen=True)
class ConfigArredondamento:
    """How decimal values are rounded for a loyalty program.

    ``casas_decimais`` must lie in [0, 6]; ``modo_arredondamento`` is one
    of the :mod:`decimal` rounding constants.
    """

    DEFAULT: ClassVar["ConfigArredondamento"]

    casas_decimais: int
    modo_arredondamento: str = ROUND_HALF_UP

    def __post_init__(self) -> None:
        if self.modo_arredondamento is None:
            raise NullArgumentError("modo_arredondamento eh obrigatorio")
        if self.modo_arredondamento not in MODOS_ARREDONDAMENTO:
            raise InvalidArgumentError(
                f"modo_arredondamento invalido: {self.modo_arredondamento!r}"
            )
        if (
            isinstance(self.casas_decimais, bool)
            or not isinstance(self.casas_decimais, int)
            or not CASAS_DECIMAIS_MIN <= self.casas_decimais <= CASAS_DECIMAIS_MAX
        ):
            raise InvalidArgumentError("casas_decimais deve estar entre 0 e 6")

    @classmethod
    def com_casas_decimais(cls, casas_decimais: int) -> "ConfigArredondamento":
        """Create a half-up configuration with the given decimal places."""
        return cls(casas_decimais, ROUND_HALF_UP)

    @property
    def quantum(self) -> Decimal:
        return Decimal(1).scaleb(-self.casas_decimais)

    def arredondar(self, valor: Decimal) -> Decimal:
        """Quantize ``valor`` to this configuration."""
        return valor.quantize(self.quantum, rounding=self.modo_arredondamento)


ConfigArredondamento.DEFAULT = ConfigArredondamento(4, ROUND_HALF_UP)

# Average cost per thousand miles is always carried with 6 places
ESCALA_CUSTO_MEDIO = ConfigArredondamento(6, ROUND_HALF_UP)
