"""Lot bookkeeping and the lot-based average cost report."""

import logging
from decimal import Decimal

from milhas_ledger.exceptions import LotNotFoundError
from milhas_ledger.models import Milhas, TipoProgramaMilhas
from milhas_ledger.models.arredondamento import ConfigArredondamento
from milhas_ledger.models.milhas import ESCALA_MILHEIROS, MILHEIRO
from milhas_ledger.models.validation import requerido
from milhas_ledger.store import LedgerDataStore

logger = logging.getLogger(__name__)


class MilhasService:
    """CRUD over miles lots held by a client.

    Unlike :class:`~milhas_ledger.services.transacao.TransacaoMilhasService`,
    lots carry no running cost basis; the average cost is recomputed from
    all lots on demand.
    """

    def __init__(self, store: LedgerDataStore) -> None:
        self.store = requerido(store, "store")

    def registrar(self, tenant_id: str, cliente_id: str, milhas: Milhas) -> Milhas:
        requerido(tenant_id, "tenant_id")
        requerido(cliente_id, "cliente_id")
        requerido(milhas, "milhas")
        lote = self.store.save_lote(tenant_id, cliente_id, milhas)
        logger.info(
            "Lote registrado: id=%s, programa=%s, quantidade=%d",
            lote.id, lote.programa.value, lote.quantidade,
        )
        return lote

    def atualizar(
        self,
        tenant_id: str,
        lote_id: str,
        quantidade: int | None = None,
        valor: Decimal | None = None,
    ) -> Milhas:
        """Change quantity and/or value of a stored lot."""
        lote = self.buscar_por_id(tenant_id, lote_id)
        if lote is None:
            raise LotNotFoundError(f"Milhas nao encontradas com id: {lote_id}")

        if quantidade is not None:
            lote = lote.com_quantidade(quantidade)
        if valor is not None:
            lote = lote.com_valor(valor)
        logger.info("Lote atualizado: id=%s", lote.id)
        return self.store.update_lote(tenant_id, lote)

    def remover(self, tenant_id: str, lote_id: str) -> None:
        self.store.delete_lote(tenant_id, requerido(lote_id, "lote_id"))
        logger.info("Lote removido: id=%s", lote_id)

    def buscar_por_id(self, tenant_id: str, lote_id: str) -> Milhas | None:
        return self.store.find_lote(tenant_id, requerido(lote_id, "lote_id"))

    def buscar_por_cliente(self, tenant_id: str, cliente_id: str) -> list[Milhas]:
        return self.store.list_lotes_by_cliente(tenant_id, requerido(cliente_id, "cliente_id"))

    def buscar_por_programa(self, tenant_id: str, programa: TipoProgramaMilhas) -> list[Milhas]:
        requerido(programa, "programa")
        return self.store.list_lotes_by_programa(tenant_id, TipoProgramaMilhas(programa))

    def calcular_saldo_total(self, tenant_id: str, cliente_id: str) -> int:
        return sum(lote.quantidade for lote in self.buscar_por_cliente(tenant_id, cliente_id))

    def calcular_custo_medio_milheiro(
        self,
        tenant_id: str,
        cliente_id: str,
        arredondamento: ConfigArredondamento | None = None,
    ) -> Decimal:
        """Total value over total thousands of miles, across all client lots.

        Returns ``Decimal(0)`` when the client holds no lots.
        """
        lotes = self.buscar_por_cliente(tenant_id, cliente_id)
        if not lotes:
            return Decimal(0)

        valor_total = sum((lote.valor for lote in lotes), Decimal(0))
        quantidade_total = sum(lote.quantidade for lote in lotes)
        milheiros = ESCALA_MILHEIROS.arredondar(Decimal(quantidade_total) / MILHEIRO)

        config = arredondamento or ConfigArredondamento.DEFAULT
        return config.arredondar(valor_total / milheiros)
