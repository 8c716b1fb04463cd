"""Pytest configuration and fixtures."""

from datetime import datetime
from decimal import Decimal

import pytest

from milhas_ledger.models import ContaPrograma
from milhas_ledger.services import MilhasService, TransacaoMilhasService
from milhas_ledger.store import LedgerDataStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def tenant_id() -> str:
    """Sample tenant ID."""
    return "tenant-test-001"


@pytest.fixture
def programa_id() -> str:
    """Sample program ID."""
    return "SMILES"


@pytest.fixture
def owner() -> str:
    """Sample account owner."""
    return "Maria Silva"


@pytest.fixture
def conta_nova(tenant_id: str, programa_id: str, owner: str) -> ContaPrograma:
    """Freshly created account with zero balance."""
    return ContaPrograma.criar(tenant_id, programa_id, "Smiles", owner)


def _conta(tenant_id: str, programa_id: str, owner: str, saldo: int, base: str, medio: str) -> ContaPrograma:
    agora = datetime(2024, 1, 15, 10, 0, 0)
    return ContaPrograma(
        id="conta-test-001",
        tenant_id=tenant_id,
        programa_id=programa_id,
        programa_nome="Smiles",
        owner=owner,
        saldo_milhas=saldo,
        custo_base_total_brl=Decimal(base),
        custo_medio_milheiro_atual=Decimal(medio),
        criado_em=agora,
        atualizado_em=agora,
    )


@pytest.fixture
def conta_10k(tenant_id: str, programa_id: str, owner: str) -> ContaPrograma:
    """Account holding 10000 miles bought for R$ 250.00."""
    return _conta(tenant_id, programa_id, owner, 10000, "250.00", "25.00")


@pytest.fixture
def conta_5k(tenant_id: str, programa_id: str, owner: str) -> ContaPrograma:
    """Account holding 5000 miles with R$ 125.00 cost basis."""
    return _conta(tenant_id, programa_id, owner, 5000, "125.00", "25.00")


@pytest.fixture
def store() -> LedgerDataStore:
    """Create a fresh store for each test."""
    return LedgerDataStore()


@pytest.fixture
def service(store: LedgerDataStore) -> TransacaoMilhasService:
    """Transaction service without sinks."""
    return TransacaoMilhasService(store)


@pytest.fixture
def milhas_service(store: LedgerDataStore) -> MilhasService:
    """Lot service over the shared store."""
    return MilhasService(store)
