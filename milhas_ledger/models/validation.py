"""Argument checks shared by the ledger value objects."""

from decimal import Decimal, InvalidOperation
from typing import Any

from milhas_ledger.exceptions import InvalidArgumentError, NullArgumentError


def requerido(valor: Any, nome: str) -> Any:
    """Return ``valor`` or raise :class:`NullArgumentError` when it is None."""
    if valor is None:
        raise NullArgumentError(f"{nome} eh obrigatorio")
    return valor


def texto_nao_vazio(valor: str | None, nome: str) -> str:
    """Return the stripped string, rejecting None and blank values."""
    requerido(valor, nome)
    texto = str(valor).strip()
    if not texto:
        raise InvalidArgumentError(f"{nome} nao pode estar vazio")
    return texto


def como_decimal(valor: Any, nome: str) -> Decimal:
    """Coerce a monetary amount to :class:`Decimal`.

    Accepts ``Decimal``, ``int`` and numeric strings. ``float`` is refused:
    money never goes through binary floating point.
    """
    requerido(valor, nome)
    if isinstance(valor, Decimal):
        resultado = valor
    elif isinstance(valor, bool) or isinstance(valor, float):
        raise InvalidArgumentError(f"{nome} deve ser Decimal, recebido {type(valor).__name__}")
    elif isinstance(valor, (int, str)):
        try:
            resultado = Decimal(valor)
        except InvalidOperation as exc:
            raise InvalidArgumentError(f"{nome} nao eh um numero valido: {valor!r}") from exc
    else:
        raise InvalidArgumentError(f"{nome} deve ser Decimal, recebido {type(valor).__name__}")

    if not resultado.is_finite():
        raise InvalidArgumentError(f"{nome} deve ser finito")
    return resultado


def como_milhas(valor: Any, nome: str = "milhas") -> int:
    """Validate that a miles quantity is an integer (bool is not)."""
    requerido(valor, nome)
    if isinstance(valor, bool) or not isinstance(valor, int):
        raise InvalidArgumentError(f"{nome} deve ser inteiro")
    return valor
