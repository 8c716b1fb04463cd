"""Orchestration of ledger transitions on program accounts.

Each registration follows the same sequence: read the current account,
compute the new state with one of the ``ContaPrograma`` transitions,
save it, append the ``Transacao`` record and publish an event. The
sequence runs under a per-account lock so that two concurrent sales of
the same account can never both pass the balance check, and the events
of an account reach the sinks in transaction log order.
"""

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

from milhas_ledger.exceptions import (
    AccountNotFoundError,
    InsufficientBalanceError,
    InvalidArgumentError,
    SinkError,
)
from milhas_ledger.logging import contexto_conta
from milhas_ledger.models import (
    ConfigArredondamento,
    ContaPrograma,
    Event,
    TipoTransacao,
    Transacao,
)
from milhas_ledger.models.validation import requerido, texto_nao_vazio
from milhas_ledger.sinks.base import LedgerSink
from milhas_ledger.sinks.serialization import to_dict
from milhas_ledger.store import LedgerDataStore

logger = logging.getLogger(__name__)

EVENT_SOURCE = "milhas-ledger"


@dataclass(frozen=True)
class TransacaoResult:
    """Result of a compra or bonus registration."""

    transacao: Transacao
    conta: ContaPrograma


@dataclass(frozen=True)
class VendaResult:
    """Result of a venda registration."""

    transacao: Transacao
    conta: ContaPrograma
    custo_removido: Decimal
    lucro: Decimal


class AccountLocks:
    """One lock per (tenant, programa, owner) account key.

    A key's lock lives only while some thread holds or waits for it, so
    the registry never outgrows the number of accounts in flight.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        # chave -> [lock, threads holding or waiting]
        self._locks: dict[tuple[str, str, str], list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

    @contextmanager
    def hold(self, tenant_id: str, programa_id: str, owner: str) -> Iterator[None]:
        chave = (tenant_id, programa_id, requerido(owner, "owner").strip())
        with self._guard:
            entrada = self._locks.setdefault(chave, [threading.Lock(), 0])
            entrada[1] += 1
        try:
            with entrada[0]:
                yield
        finally:
            with self._guard:
                entrada[1] -= 1
                if entrada[1] == 0:
                    del self._locks[chave]


class TransacaoMilhasService:
    """Register purchases, bonuses and sales, and query accounts and history.

    Parameters
    ----------
    store : LedgerDataStore
        Backing store for accounts, transactions and programs.
    sinks : list[LedgerSink] | None
        Destinations that receive one event per registered transition.
    topic_prefix : str
        Prefix of the events topic (``{prefix}.transacoes``).
    arredondamento_padrao : ConfigArredondamento | None
        Monetary rounding for sales of programs with no registered rules.
    """

    def __init__(
        self,
        store: LedgerDataStore,
        sinks: list[LedgerSink] | None = None,
        topic_prefix: str = "dev.milhas",
        arredondamento_padrao: ConfigArredondamento | None = None,
    ) -> None:
        self.store = requerido(store, "store")
        self.sinks = list(sinks or [])
        self.topic = f"{topic_prefix}.transacoes"
        self.arredondamento_padrao = arredondamento_padrao or ConfigArredondamento.DEFAULT
        self._locks = AccountLocks()

    # Registrar transacoes
    def registrar_compra(
        self,
        tenant_id: str,
        programa_id: str,
        programa_nome: str,
        owner: str,
        milhas: int,
        valor: Any,
        fonte: str | None = None,
        observacao: str | None = None,
    ) -> TransacaoResult:
        """Register a purchase, creating the account on first use."""
        logger.info(
            "Registrando compra: programa=%s, owner=%s, milhas=%s, valor=%s",
            programa_nome, owner, milhas, valor,
        )

        with self._locks.hold(tenant_id, programa_id, owner):
            conta = self._obter_ou_criar_conta(tenant_id, programa_id, programa_nome, owner)
            conta_atualizada = self.store.save_conta(conta.aplicar_compra(milhas, valor))
            transacao = self.store.add_transacao(
                Transacao.criar_compra(conta_atualizada.id, milhas, valor, fonte, observacao)
            )
            self._publicar(transacao, conta_atualizada)

        logger.info(
            "Compra registrada: transacao_id=%s, conta_id=%s, novo_saldo=%d",
            transacao.id, conta_atualizada.id, conta_atualizada.saldo_milhas,
            extra=contexto_conta(conta_atualizada),
        )
        return TransacaoResult(transacao, conta_atualizada)

    def registrar_bonus(
        self,
        tenant_id: str,
        programa_id: str,
        programa_nome: str,
        owner: str,
        milhas: int,
        fonte: str | None = None,
        observacao: str | None = None,
    ) -> TransacaoResult:
        """Register free miles, creating the account on first use."""
        logger.info(
            "Registrando bonus: programa=%s, owner=%s, milhas=%s, fonte=%s",
            programa_nome, owner, milhas, fonte,
        )

        with self._locks.hold(tenant_id, programa_id, owner):
            conta = self._obter_ou_criar_conta(tenant_id, programa_id, programa_nome, owner)
            conta_atualizada = self.store.save_conta(conta.aplicar_bonus(milhas))
            transacao = self.store.add_transacao(
                Transacao.criar_bonus(conta_atualizada.id, milhas, fonte, observacao)
            )
            self._publicar(transacao, conta_atualizada)

        logger.info(
            "Bonus registrado: transacao_id=%s, conta_id=%s, novo_saldo=%d",
            transacao.id, conta_atualizada.id, conta_atualizada.saldo_milhas,
            extra=contexto_conta(conta_atualizada),
        )
        return TransacaoResult(transacao, conta_atualizada)

    def registrar_venda(
        self,
        tenant_id: str,
        programa_id: str,
        programa_nome: str,
        owner: str,
        milhas: int,
        valor_venda: Any,
        observacao: str | None = None,
    ) -> VendaResult:
        """Register a sale from an existing account.

        Raises
        ------
        AccountNotFoundError
            If the owner has no account in the program.
        InsufficientBalanceError
            If the account holds fewer miles than requested. Nothing is
            saved or recorded in that case.
        """
        logger.info(
            "Registrando venda: programa=%s, owner=%s, milhas=%s, valor_venda=%s",
            programa_nome, owner, milhas, valor_venda,
        )

        with self._locks.hold(tenant_id, programa_id, owner):
            conta = self.store.find_conta_by_tenant_programa_owner(tenant_id, programa_id, owner)
            if conta is None:
                raise AccountNotFoundError(
                    f"ContaPrograma nao encontrada para programa={programa_nome} e owner={owner}"
                )

            try:
                resultado = conta.aplicar_venda(milhas, valor_venda, self._arredondamento(programa_id))
            except InsufficientBalanceError as exc:
                logger.warning(
                    "Venda recusada: conta_id=%s, saldo=%d, solicitado=%d",
                    conta.id, exc.saldo_atual, exc.milhas_solicitadas,
                    extra=contexto_conta(conta),
                )
                raise

            conta_atualizada = self.store.save_conta(resultado.conta_atualizada)
            transacao = self.store.add_transacao(
                Transacao.criar_venda(conta_atualizada.id, milhas, valor_venda, observacao)
            )
            self._publicar(transacao, conta_atualizada, lucro=resultado.lucro)

        logger.info(
            "Venda registrada: transacao_id=%s, conta_id=%s, novo_saldo=%d, lucro=%s",
            transacao.id, conta_atualizada.id, conta_atualizada.saldo_milhas, resultado.lucro,
            extra=contexto_conta(conta_atualizada),
        )
        return VendaResult(transacao, conta_atualizada, resultado.custo_removido, resultado.lucro)

    # Consultar contas
    def buscar_conta(self, tenant_id: str, conta_id: str) -> ContaPrograma | None:
        requerido(tenant_id, "tenant_id")
        requerido(conta_id, "conta_id")
        return self.store.find_conta(tenant_id, conta_id)

    def listar_por_owner(self, tenant_id: str, owner: str) -> list[ContaPrograma]:
        requerido(tenant_id, "tenant_id")
        return self.store.list_contas_by_owner(tenant_id, texto_nao_vazio(owner, "owner"))

    def listar_todas(self, tenant_id: str) -> list[ContaPrograma]:
        requerido(tenant_id, "tenant_id")
        return self.store.list_contas(tenant_id)

    def total_milhas(self, tenant_id: str) -> int:
        requerido(tenant_id, "tenant_id")
        return self.store.total_milhas(tenant_id)

    def totais_por_owner(self, tenant_id: str) -> dict[str, int]:
        requerido(tenant_id, "tenant_id")
        return self.store.totais_por_owner(tenant_id)

    def totais_por_programa(self, tenant_id: str) -> dict[str, int]:
        requerido(tenant_id, "tenant_id")
        return self.store.totais_por_programa(tenant_id)

    # Consultar transacoes
    def listar_transacoes(self, conta_id: str) -> list[Transacao]:
        requerido(conta_id, "conta_id")
        return self.store.list_transacoes(conta_id)

    def listar_por_periodo(self, conta_id: str, inicio: datetime, fim: datetime) -> list[Transacao]:
        requerido(conta_id, "conta_id")
        requerido(inicio, "inicio")
        requerido(fim, "fim")
        # Transaction dates are naive local time
        if _tem_fuso(inicio) or _tem_fuso(fim):
            raise InvalidArgumentError("inicio e fim devem ser datas sem fuso horario")
        if inicio > fim:
            raise InvalidArgumentError("inicio nao pode ser posterior a fim")
        return self.store.list_transacoes_por_periodo(conta_id, inicio, fim)

    def listar_por_tipo(self, conta_id: str, tipo: TipoTransacao) -> list[Transacao]:
        requerido(conta_id, "conta_id")
        requerido(tipo, "tipo")
        return self.store.list_transacoes_por_tipo(conta_id, TipoTransacao(tipo))

    # Helpers
    def _obter_ou_criar_conta(
        self, tenant_id: str, programa_id: str, programa_nome: str, owner: str
    ) -> ContaPrograma:
        requerido(tenant_id, "tenant_id")
        requerido(programa_id, "programa_id")
        requerido(owner, "owner")
        conta = self.store.find_conta_by_tenant_programa_owner(tenant_id, programa_id, owner)
        if conta is not None:
            logger.debug("Conta existente encontrada: id=%s", conta.id)
            return conta

        logger.info("Criando nova conta: programa=%s, owner=%s", programa_nome, owner)
        # Saved only together with the first transition
        return ContaPrograma.criar(tenant_id, programa_id, programa_nome, owner)

    def _arredondamento(self, programa_id: str) -> ConfigArredondamento:
        programa = self.store.get_programa(programa_id)
        if programa is None:
            return self.arredondamento_padrao
        return programa.regras_arredondamento

    def _publicar(self, transacao: Transacao, conta: ContaPrograma, lucro: Decimal | None = None) -> None:
        if not self.sinks:
            return

        data = {"transacao": to_dict(transacao), "conta": to_dict(conta)}
        if lucro is not None:
            data["lucro"] = str(lucro)
        event = Event.criar(
            f"transacao.{transacao.tipo.value.lower()}",
            EVENT_SOURCE,
            conta.id,
            data,
            metadata={"tenant_id": conta.tenant_id, "programa_id": conta.programa_id},
            event_time=transacao.criado_em,
        )
        for sink in self.sinks:
            try:
                sink.write_record(self.topic, event)
            except SinkError:
                # The transition is already committed; the log stays authoritative
                logger.exception("Falha ao publicar evento %s em %s", event.event_type, type(sink).__name__)


def _tem_fuso(valor: datetime) -> bool:
    return valor.tzinfo is not None and valor.utcoffset() is not None
