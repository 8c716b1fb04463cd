"""Domain models for the miles ledger."""

from milhas_ledger.models.arredondamento import ESCALA_CUSTO_MEDIO, ConfigArredondamento
from milhas_ledger.models.base import Event
from milhas_ledger.models.conta import ContaPrograma, ResultadoVenda, calcular_custo_medio
from milhas_ledger.models.enums import StatusPrograma, TipoProgramaMilhas, TipoTransacao
from milhas_ledger.models.milhas import Milhas
from milhas_ledger.models.programa import ProgramaDeMilhas
from milhas_ledger.models.transacao import Transacao

__all__ = [
    "ConfigArredondamento",
    "ContaPrograma",
    "ESCALA_CUSTO_MEDIO",
    "Event",
    "Milhas",
    "ProgramaDeMilhas",
    "ResultadoVenda",
    "StatusPrograma",
    "TipoProgramaMilhas",
    "TipoTransacao",
    "Transacao",
    "calcular_custo_medio",
]
