"""Tests for sink serialization helpers."""

import json
import uuid
from datetime import date, datetime
from decimal import Decimal

from milhas_ledger.models import (
    ConfigArredondamento,
    ContaPrograma,
    ProgramaDeMilhas,
    TipoTransacao,
    Transacao,
)
from milhas_ledger.sinks.serialization import (
    serialize_value,
    to_dict,
    to_json,
)


class TestSerializeValue:
    """Tests for serialize_value."""

    def test_decimal_kept_exact(self) -> None:
        assert serialize_value(Decimal("23.333333")) == "23.333333"

    def test_enum(self) -> None:
        assert serialize_value(TipoTransacao.VENDA) == "VENDA"

    def test_dates(self) -> None:
        assert serialize_value(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
        assert serialize_value(date(2024, 1, 2)) == "2024-01-02"

    def test_uuid(self) -> None:
        valor = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert serialize_value(valor) == "12345678-1234-5678-1234-567812345678"

    def test_nested(self) -> None:
        resultado = serialize_value({"a": [Decimal("1.5"), (TipoTransacao.BONUS,)]})

        assert resultado == {"a": ["1.5", ["BONUS"]]}

    def test_passthrough(self) -> None:
        assert serialize_value(10) == 10
        assert serialize_value(None) is None


class TestToDict:
    """Tests for to_dict and friends."""

    def test_transacao(self) -> None:
        transacao = Transacao.criar_compra("conta-1", 1000, Decimal("25.00"), "Site")

        data = to_dict(transacao)

        assert data["tipo"] == "COMPRA"
        assert data["valor_brl"] == "25.00"
        assert data["milhas"] == 1000
        assert isinstance(data["data"], str)

    def test_nested_dataclass(self) -> None:
        programa = ProgramaDeMilhas.criar("SMILES", "Smiles").com_regras_arredondamento(ConfigArredondamento(2))

        data = to_dict(programa)

        assert data["regras_arredondamento"]["casas_decimais"] == 2
        assert data["status"] == "ATIVO"

    def test_nested_account_in_sale_result(self, conta_10k: ContaPrograma) -> None:
        resultado = conta_10k.aplicar_venda(5000, Decimal("150.00"))

        data = to_dict(resultado)

        assert data["custo_removido"] == "125.0000"
        assert data["conta_atualizada"]["saldo_milhas"] == 5000

    def test_dict_and_other(self) -> None:
        assert to_dict({"v": Decimal("1")}) == {"v": "1"}
        assert to_dict(42) == {"value": "42"}

    def test_to_json(self, conta_10k: ContaPrograma) -> None:
        data = json.loads(to_json(conta_10k))

        assert data["custo_base_total_brl"] == "250.00"
        assert data["owner"] == conta_10k.owner

    def test_to_json_pretty(self) -> None:
        assert "\n" in to_json({"a": 1, "b": 2}, pretty=True)
