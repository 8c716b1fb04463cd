"""Sample miles portfolios replayed through the ledger services."""

import logging
import random

from milhas_ledger.generators import LoteGenerator, OperacaoGenerator
from milhas_ledger.models import (
    ConfigArredondamento,
    ProgramaDeMilhas,
    TipoProgramaMilhas,
    TipoTransacao,
)
from milhas_ledger.services import MilhasService, TransacaoMilhasService
from milhas_ledger.sinks.base import LedgerSink
from milhas_ledger.store import LedgerDataStore

logger = logging.getLogger(__name__)

BRANDS = {
    TipoProgramaMilhas.SMILES: "Smiles",
    TipoProgramaMilhas.LATAM_PASS: "LATAM Pass",
    TipoProgramaMilhas.AZUL_FIDELIDADE: "Azul Fidelidade",
    TipoProgramaMilhas.LIVELO: "Livelo",
    TipoProgramaMilhas.ESFERA: "Esfera",
    TipoProgramaMilhas.AADVANTAGE: "AAdvantage",
}


class CarteiraScenario:
    """Generate tenants whose owners trade miles across several programs.

    Every operation goes through :class:`TransacaoMilhasService`, so the
    resulting accounts are exactly what the ledger would hold after
    replaying the transaction log.
    """

    def __init__(
        self,
        num_tenants: int = 2,
        owners_per_tenant: int = 3,
        programs_per_owner: tuple[int, int] = (1, 3),
        operations_per_account: int = 10,
        lots_per_owner: int = 2,
        seed: int | None = None,
        sinks: list[LedgerSink] | None = None,
        topic_prefix: str = "dev.milhas",
        arredondamento: ConfigArredondamento | None = None,
    ) -> None:
        """Initialize portfolio scenario.

        Parameters
        ----------
        num_tenants : int
            Number of tenants to generate.
        owners_per_tenant : int
            Account owners per tenant.
        programs_per_owner : tuple[int, int]
            Min and max programs each owner holds miles in.
        operations_per_account : int
            Operations replayed on each account.
        lots_per_owner : int
            Miles lots registered for each owner.
        seed : int | None
            Random seed for reproducibility.
        sinks : list[LedgerSink] | None
            Sinks receiving the transaction events.
        topic_prefix : str
            Prefix of the events topic.
        arredondamento : ConfigArredondamento | None
            Monetary rounding for the registered programs.
        """
        self.num_tenants = num_tenants
        self.owners_per_tenant = owners_per_tenant
        self.programs_per_owner = programs_per_owner
        self.operations_per_account = operations_per_account
        self.lots_per_owner = lots_per_owner
        self.arredondamento = arredondamento or ConfigArredondamento.DEFAULT

        if seed is not None:
            random.seed(seed)

        self.store = LedgerDataStore()
        self.service = TransacaoMilhasService(
            self.store, sinks=sinks, topic_prefix=topic_prefix, arredondamento_padrao=self.arredondamento
        )
        self.milhas_service = MilhasService(self.store)
        self._operacao_gen = OperacaoGenerator(seed=seed)
        self._lote_gen = LoteGenerator(seed=seed)

    def generate(self) -> LedgerDataStore:
        """Generate all data for the scenario.

        Returns
        -------
        LedgerDataStore
            Store containing accounts, transactions, programs and lots.
        """
        logger.info(
            "Starting carteira scenario: %d tenants x %d owners",
            self.num_tenants,
            self.owners_per_tenant,
        )

        programas = self._registrar_programas()
        for _ in range(self.num_tenants):
            tenant_id = self._operacao_gen.fake.uuid4()
            for _ in range(self.owners_per_tenant):
                self._generate_owner(tenant_id, programas)

        logger.info(
            "Generated carteira: %d contas, %d transacoes, %d lotes",
            len(self.store.contas),
            len(self.store.transacoes),
            len(self.store.lotes),
        )
        return self.store

    def _registrar_programas(self) -> list[ProgramaDeMilhas]:
        programas = []
        for tipo, brand in BRANDS.items():
            programa = ProgramaDeMilhas.criar(tipo.value, brand).com_regras_arredondamento(self.arredondamento)
            programas.append(self.store.add_programa(programa))
        return programas

    def _generate_owner(self, tenant_id: str, programas: list[ProgramaDeMilhas]) -> None:
        owner = self._operacao_gen.nome_titular()
        escolhidos = random.sample(programas, k=random.randint(*self.programs_per_owner))

        for programa in escolhidos:
            self._replay(tenant_id, programa, owner)

        # Lots are keyed by client; the owner name doubles as client id here
        for _ in range(self.lots_per_owner):
            self.milhas_service.registrar(tenant_id, owner, self._lote_gen.generate())

    def _replay(self, tenant_id: str, programa: ProgramaDeMilhas, owner: str) -> None:
        for operacao in self._operacao_gen.generate_sequence(self.operations_per_account):
            if operacao.tipo == TipoTransacao.COMPRA:
                self.service.registrar_compra(
                    tenant_id, programa.id, programa.brand, owner, operacao.milhas, operacao.valor, operacao.fonte
                )
            elif operacao.tipo == TipoTransacao.BONUS:
                self.service.registrar_bonus(
                    tenant_id, programa.id, programa.brand, owner, operacao.milhas, operacao.fonte
                )
            else:
                self.service.registrar_venda(
                    tenant_id, programa.id, programa.brand, owner, operacao.milhas, operacao.valor
                )
