"""Tenant-keyed in-memory ledger store with relationship tracking."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime

from milhas_ledger.exceptions import (
    DuplicateEntityError,
    LotNotFoundError,
    ReferentialIntegrityError,
)
from milhas_ledger.models import (
    ContaPrograma,
    Milhas,
    ProgramaDeMilhas,
    StatusPrograma,
    TipoProgramaMilhas,
    TipoTransacao,
    Transacao,
)

ContaKey = tuple[str, str, str]  # (tenant_id, programa_id, owner)


@dataclass
class LedgerDataStore:
    """In-memory store for program accounts, transactions and lots.

    Every account and lot lookup is scoped by tenant: a lookup never
    returns another tenant's entity, even when given its id.
    """

    # Primary entities
    contas: dict[str, ContaPrograma] = field(default_factory=dict)
    programas: dict[str, ProgramaDeMilhas] = field(default_factory=dict)
    lotes: dict[str, Milhas] = field(default_factory=dict)

    # Append-only log
    transacoes: list[Transacao] = field(default_factory=list)

    # Relationship indexes
    _conta_por_chave: dict[ContaKey, str] = field(default_factory=dict)
    _tenant_contas: dict[str, list[str]] = field(default_factory=dict)
    _conta_transacoes: dict[str, list[int]] = field(default_factory=dict)
    _transacao_ids: set[str] = field(default_factory=set)
    _lote_dono: dict[str, tuple[str, str]] = field(default_factory=dict)  # lote_id -> (tenant, cliente)

    # Contas
    def save_conta(self, conta: ContaPrograma) -> ContaPrograma:
        """Insert or replace an account state."""
        chave = (conta.tenant_id, conta.programa_id, conta.owner.strip())
        existente = self._conta_por_chave.get(chave)
        if existente is not None and existente != conta.id:
            raise DuplicateEntityError(
                f"Account already exists for programa={conta.programa_id} owner={conta.owner}"
            )

        if conta.id not in self.contas:
            self._conta_por_chave[chave] = conta.id
            self._tenant_contas.setdefault(conta.tenant_id, []).append(conta.id)
            self._conta_transacoes[conta.id] = []
        self.contas[conta.id] = conta
        return conta

    def find_conta(self, tenant_id: str, conta_id: str) -> ContaPrograma | None:
        conta = self.contas.get(conta_id)
        if conta is None or conta.tenant_id != tenant_id:
            return None
        return conta

    def find_conta_by_tenant_programa_owner(
        self, tenant_id: str, programa_id: str, owner: str
    ) -> ContaPrograma | None:
        conta_id = self._conta_por_chave.get((tenant_id, programa_id, owner.strip()))
        return self.contas[conta_id] if conta_id else None

    def list_contas(self, tenant_id: str) -> list[ContaPrograma]:
        """Get all accounts for a tenant."""
        return [self.contas[cid] for cid in self._tenant_contas.get(tenant_id, [])]

    def list_contas_by_owner(self, tenant_id: str, owner: str) -> list[ContaPrograma]:
        dono = owner.strip()
        return [c for c in self.list_contas(tenant_id) if c.owner == dono]

    def total_milhas(self, tenant_id: str) -> int:
        return sum(c.saldo_milhas for c in self.list_contas(tenant_id))

    def totais_por_owner(self, tenant_id: str) -> dict[str, int]:
        totais: dict[str, int] = {}
        for conta in self.list_contas(tenant_id):
            totais[conta.owner] = totais.get(conta.owner, 0) + conta.saldo_milhas
        return totais

    def totais_por_programa(self, tenant_id: str) -> dict[str, int]:
        totais: dict[str, int] = {}
        for conta in self.list_contas(tenant_id):
            totais[conta.programa_nome] = totais.get(conta.programa_nome, 0) + conta.saldo_milhas
        return totais

    # Transacoes
    def add_transacao(self, transacao: Transacao) -> Transacao:
        """Append a transaction to the log."""
        if transacao.conta_programa_id not in self.contas:
            raise ReferentialIntegrityError(f"Account {transacao.conta_programa_id} not found")
        if transacao.id in self._transacao_ids:
            raise DuplicateEntityError(f"Transaction {transacao.id} already recorded")

        idx = len(self.transacoes)
        self.transacoes.append(transacao)
        self._transacao_ids.add(transacao.id)
        self._conta_transacoes[transacao.conta_programa_id].append(idx)
        return transacao

    def list_transacoes(self, conta_id: str) -> list[Transacao]:
        """Get all transactions for an account, oldest first."""
        indices = self._conta_transacoes.get(conta_id, [])
        return [self.transacoes[i] for i in indices]

    def list_transacoes_por_periodo(
        self, conta_id: str, inicio: datetime, fim: datetime
    ) -> list[Transacao]:
        """Transactions whose ``data`` falls in [inicio, fim]."""
        return [t for t in self.list_transacoes(conta_id) if inicio <= t.data <= fim]

    def list_transacoes_por_tipo(self, conta_id: str, tipo: TipoTransacao) -> list[Transacao]:
        return [t for t in self.list_transacoes(conta_id) if t.tipo == tipo]

    # Programas
    def add_programa(self, programa: ProgramaDeMilhas) -> ProgramaDeMilhas:
        """Insert or replace a program; brands are unique (case-insensitive)."""
        existente = self.find_programa_by_brand(programa.brand)
        if existente is not None and existente.id != programa.id:
            raise DuplicateEntityError(f"Ja existe um programa com o brand: {programa.brand}")
        self.programas[programa.id] = programa
        return programa

    def get_programa(self, programa_id: str) -> ProgramaDeMilhas | None:
        return self.programas.get(programa_id)

    def find_programa_by_brand(self, brand: str) -> ProgramaDeMilhas | None:
        alvo = brand.strip().casefold()
        for programa in self.programas.values():
            if programa.brand.casefold() == alvo:
                return programa
        return None

    def list_programas(self) -> list[ProgramaDeMilhas]:
        return list(self.programas.values())

    def list_programas_ativos(self) -> list[ProgramaDeMilhas]:
        return [p for p in self.programas.values() if p.status == StatusPrograma.ATIVO]

    # Lotes
    def save_lote(self, tenant_id: str, cliente_id: str, lote: Milhas) -> Milhas:
        """Store a new lot, assigning an id when it has none."""
        if lote.id is None:
            lote = lote.com_id(str(uuid.uuid4()))
        elif lote.id in self.lotes:
            raise DuplicateEntityError(f"Lot {lote.id} already stored")

        self.lotes[lote.id] = lote
        self._lote_dono[lote.id] = (tenant_id, cliente_id)
        return lote

    def update_lote(self, tenant_id: str, lote: Milhas) -> Milhas:
        if lote.id is None or self.find_lote(tenant_id, lote.id) is None:
            raise LotNotFoundError(f"Lot {lote.id} not found")
        self.lotes[lote.id] = lote
        return lote

    def delete_lote(self, tenant_id: str, lote_id: str) -> None:
        if self.find_lote(tenant_id, lote_id) is None:
            raise LotNotFoundError(f"Lot {lote_id} not found")
        del self.lotes[lote_id]
        del self._lote_dono[lote_id]

    def find_lote(self, tenant_id: str, lote_id: str) -> Milhas | None:
        dono = self._lote_dono.get(lote_id)
        if dono is None or dono[0] != tenant_id:
            return None
        return self.lotes[lote_id]

    def list_lotes_by_cliente(self, tenant_id: str, cliente_id: str) -> list[Milhas]:
        return [
            self.lotes[lid]
            for lid, dono in self._lote_dono.items()
            if dono == (tenant_id, cliente_id)
        ]

    def list_lotes_by_programa(self, tenant_id: str, programa: TipoProgramaMilhas) -> list[Milhas]:
        return [
            self.lotes[lid]
            for lid, dono in self._lote_dono.items()
            if dono[0] == tenant_id and self.lotes[lid].programa == programa
        ]

    def summary(self) -> dict[str, int]:
        """Return summary counts of all entities."""
        return {
            "contas": len(self.contas),
            "programas": len(self.programas),
            "lotes": len(self.lotes),
            "transacoes": len(self.transacoes),
        }
