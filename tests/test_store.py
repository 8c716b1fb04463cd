"""Tests for LedgerDataStore."""

import dataclasses
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from milhas_ledger.exceptions import (
    DuplicateEntityError,
    LotNotFoundError,
    ReferentialIntegrityError,
)
from milhas_ledger.models import (
    ContaPrograma,
    Milhas,
    ProgramaDeMilhas,
    TipoProgramaMilhas,
    TipoTransacao,
    Transacao,
)
from milhas_ledger.store import LedgerDataStore


def _conta(tenant: str, programa: str, owner: str, saldo: int = 0, base: str = "0") -> ContaPrograma:
    conta = ContaPrograma.criar(tenant, programa, programa.title(), owner)
    if saldo:
        conta = conta.aplicar_compra(saldo, Decimal(base))
    return conta


class TestContas:
    """Tests for account storage."""

    def test_save_and_find(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana", 1000, "25"))

        assert store.find_conta("t1", conta.id) == conta
        assert store.find_conta_by_tenant_programa_owner("t1", "SMILES", "Ana") == conta

    def test_save_replaces_state(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))
        atualizada = store.save_conta(conta.aplicar_bonus(500))

        assert store.find_conta("t1", conta.id).saldo_milhas == 500
        assert store.list_contas("t1") == [atualizada]

    def test_duplicate_account_key_rejected(self, store: LedgerDataStore) -> None:
        store.save_conta(_conta("t1", "SMILES", "Ana"))

        with pytest.raises(DuplicateEntityError):
            store.save_conta(_conta("t1", "SMILES", "Ana"))

    def test_owner_lookup_ignores_padding(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))

        assert store.find_conta_by_tenant_programa_owner("t1", "SMILES", "  Ana ") == conta

    def test_tenant_isolation(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana", 1000, "20"))
        store.save_conta(_conta("t2", "SMILES", "Ana", 3000, "60"))

        assert store.find_conta("t2", conta.id) is None
        assert store.find_conta_by_tenant_programa_owner("t3", "SMILES", "Ana") is None
        assert store.total_milhas("t1") == 1000
        assert store.total_milhas("t2") == 3000
        assert store.list_contas("t3") == []

    def test_list_by_owner(self, store: LedgerDataStore) -> None:
        store.save_conta(_conta("t1", "SMILES", "Ana"))
        store.save_conta(_conta("t1", "LIVELO", "Ana"))
        store.save_conta(_conta("t1", "SMILES", "Bruno"))

        assert len(store.list_contas_by_owner("t1", "Ana")) == 2
        assert len(store.list_contas_by_owner("t1", "Carla")) == 0

    def test_totals(self, store: LedgerDataStore) -> None:
        store.save_conta(_conta("t1", "SMILES", "Ana", 1000, "20"))
        store.save_conta(_conta("t1", "LIVELO", "Ana", 2000, "40"))
        store.save_conta(_conta("t1", "SMILES", "Bruno", 500, "10"))

        assert store.total_milhas("t1") == 3500
        assert store.totais_por_owner("t1") == {"Ana": 3000, "Bruno": 500}
        assert store.totais_por_programa("t1") == {"Smiles": 1500, "Livelo": 2000}


class TestTransacoes:
    """Tests for the transaction log."""

    def test_add_and_list_in_order(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))
        primeira = store.add_transacao(Transacao.criar_compra(conta.id, 1000, Decimal("20")))
        segunda = store.add_transacao(Transacao.criar_venda(conta.id, 500, Decimal("15")))

        assert store.list_transacoes(conta.id) == [primeira, segunda]

    def test_unknown_account_rejected(self, store: LedgerDataStore) -> None:
        with pytest.raises(ReferentialIntegrityError):
            store.add_transacao(Transacao.criar_bonus("missing", 100))

    def test_duplicate_transaction_rejected(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))
        transacao = store.add_transacao(Transacao.criar_bonus(conta.id, 100))

        with pytest.raises(DuplicateEntityError):
            store.add_transacao(transacao)
        assert len(store.transacoes) == 1

    def test_period_filter_is_inclusive(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))
        base = datetime(2024, 5, 1, 12, 0)
        for dias in range(5):
            store.add_transacao(
                dataclasses.replace(Transacao.criar_bonus(conta.id, 100), data=base + timedelta(days=dias))
            )

        resultado = store.list_transacoes_por_periodo(conta.id, base + timedelta(days=1), base + timedelta(days=3))

        assert [t.data for t in resultado] == [base + timedelta(days=d) for d in (1, 2, 3)]

    def test_type_filter(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))
        store.add_transacao(Transacao.criar_compra(conta.id, 1000, Decimal("20")))
        store.add_transacao(Transacao.criar_bonus(conta.id, 100))
        store.add_transacao(Transacao.criar_compra(conta.id, 1000, Decimal("25")))

        compras = store.list_transacoes_por_tipo(conta.id, TipoTransacao.COMPRA)

        assert len(compras) == 2
        assert all(t.tipo == TipoTransacao.COMPRA for t in compras)

    def test_unknown_account_history_empty(self, store: LedgerDataStore) -> None:
        assert store.list_transacoes("missing") == []


class TestProgramas:
    """Tests for the program catalog."""

    def test_add_and_get(self, store: LedgerDataStore) -> None:
        programa = store.add_programa(ProgramaDeMilhas.criar("SMILES", "Smiles"))

        assert store.get_programa("SMILES") == programa
        assert store.find_programa_by_brand("smiles") == programa
        assert store.get_programa("OTHER") is None

    def test_duplicate_brand_rejected(self, store: LedgerDataStore) -> None:
        store.add_programa(ProgramaDeMilhas.criar("SMILES", "Smiles"))

        with pytest.raises(DuplicateEntityError):
            store.add_programa(ProgramaDeMilhas.criar("SMILES-2", "SMILES"))

    def test_replace_same_program(self, store: LedgerDataStore) -> None:
        programa = store.add_programa(ProgramaDeMilhas.criar("SMILES", "Smiles"))
        store.add_programa(programa.desativar())

        assert store.list_programas_ativos() == []
        assert len(store.list_programas()) == 1


class TestLotes:
    """Tests for lot storage."""

    def test_save_assigns_id(self, store: LedgerDataStore) -> None:
        lote = store.save_lote("t1", "cli-1", Milhas.criar(TipoProgramaMilhas.SMILES, 1000, Decimal("20")))

        assert lote.id is not None
        assert store.find_lote("t1", lote.id) == lote

    def test_save_keeps_given_id(self, store: LedgerDataStore) -> None:
        lote = Milhas.com_id_novo("lote-1", TipoProgramaMilhas.SMILES, 1000, Decimal("20"))

        assert store.save_lote("t1", "cli-1", lote).id == "lote-1"
        with pytest.raises(DuplicateEntityError):
            store.save_lote("t1", "cli-1", lote)

    def test_tenant_scoped_lookup(self, store: LedgerDataStore) -> None:
        lote = store.save_lote("t1", "cli-1", Milhas.criar(TipoProgramaMilhas.SMILES, 1000, Decimal("20")))

        assert store.find_lote("t2", lote.id) is None
        with pytest.raises(LotNotFoundError):
            store.delete_lote("t2", lote.id)

    def test_update_and_delete(self, store: LedgerDataStore) -> None:
        lote = store.save_lote("t1", "cli-1", Milhas.criar(TipoProgramaMilhas.SMILES, 1000, Decimal("20")))

        store.update_lote("t1", lote.com_quantidade(3000))
        assert store.find_lote("t1", lote.id).quantidade == 3000

        store.delete_lote("t1", lote.id)
        assert store.find_lote("t1", lote.id) is None

    def test_update_unknown(self, store: LedgerDataStore) -> None:
        with pytest.raises(LotNotFoundError):
            store.update_lote("t1", Milhas.com_id_novo("x", TipoProgramaMilhas.SMILES, 1, Decimal("1")))

    def test_list_filters(self, store: LedgerDataStore) -> None:
        store.save_lote("t1", "cli-1", Milhas.criar(TipoProgramaMilhas.SMILES, 1000, Decimal("20")))
        store.save_lote("t1", "cli-1", Milhas.criar(TipoProgramaMilhas.LIVELO, 1000, Decimal("20")))
        store.save_lote("t1", "cli-2", Milhas.criar(TipoProgramaMilhas.SMILES, 1000, Decimal("20")))
        store.save_lote("t2", "cli-1", Milhas.criar(TipoProgramaMilhas.SMILES, 1000, Decimal("20")))

        assert len(store.list_lotes_by_cliente("t1", "cli-1")) == 2
        assert len(store.list_lotes_by_programa("t1", TipoProgramaMilhas.SMILES)) == 2


class TestSummary:
    """Tests for summary counts."""

    def test_summary(self, store: LedgerDataStore) -> None:
        conta = store.save_conta(_conta("t1", "SMILES", "Ana"))
        store.add_transacao(Transacao.criar_bonus(conta.id, 100))

        assert store.summary() == {"contas": 1, "programas": 0, "lotes": 0, "transacoes": 1}
