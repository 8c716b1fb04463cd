"""Synthetic data generators for the miles ledger."""

from milhas_ledger.generators.base import BaseGenerator
from milhas_ledger.generators.operacoes import LoteGenerator, Operacao, OperacaoGenerator

__all__ = ["BaseGenerator", "LoteGenerator", "Operacao", "OperacaoGenerator"]
