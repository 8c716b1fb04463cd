"""Enumeration types for the miles ledger domain."""

from enum import Enum


class TipoTransacao(str, Enum):
    """Kind of ledger transition recorded in the transaction log."""

    COMPRA = "COMPRA"  # +milhas, +custo base
    VENDA = "VENDA"  # -milhas, -custo base proporcional
    BONUS = "BONUS"  # +milhas, custo base inalterado


class TipoProgramaMilhas(str, Enum):
    SMILES = "SMILES"
    LATAM_PASS = "LATAM_PASS"
    AZUL_FIDELIDADE = "AZUL_FIDELIDADE"
    LIVELO = "LIVELO"
    ESFERA = "ESFERA"
    AADVANTAGE = "AADVANTAGE"


class StatusPrograma(str, Enum):
    ATIVO = "ATIVO"
    INATIVO = "INATIVO"
