"""Scenarios for generating realistic miles portfolios."""

from milhas_ledger.scenarios.carteira import CarteiraScenario

__all__ = ["CarteiraScenario"]
