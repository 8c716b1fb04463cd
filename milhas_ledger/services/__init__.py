"""Application services over the ledger store."""

from milhas_ledger.services.milhas import MilhasService
from milhas_ledger.services.transacao import (
    TransacaoMilhasService,
    TransacaoResult,
    VendaResult,
)

__all__ = ["MilhasService", "TransacaoMilhasService", "TransacaoResult", "VendaResult"]
