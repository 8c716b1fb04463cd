"""Loyalty program catalog entry."""

from dataclasses import dataclass, field, replace

from milhas_ledger.exceptions import InvalidArgumentError
from milhas_ledger.models.arredondamento import ConfigArredondamento
from milhas_ledger.models.enums import StatusPrograma
from milhas_ledger.models.validation import requerido, texto_nao_vazio

MOEDA_PADRAO = "BRL"


@dataclass(frozen=True)
class ProgramaDeMilhas:
    """Loyalty program (e.g. "Smiles", "LATAM Pass").

    ``regras_arredondamento`` sets the monetary rounding used when miles
    of this program are sold.
    """

    id: str
    brand: str
    status: StatusPrograma = StatusPrograma.ATIVO
    moeda: str = MOEDA_PADRAO
    regras_arredondamento: ConfigArredondamento = field(
        default_factory=lambda: ConfigArredondamento.DEFAULT
    )

    def __post_init__(self) -> None:
        requerido(self.id, "id")
        requerido(self.status, "status")
        requerido(self.regras_arredondamento, "regras_arredondamento")
        object.__setattr__(self, "brand", texto_nao_vazio(self.brand, "brand"))
        moeda = texto_nao_vazio(self.moeda, "moeda")
        if len(moeda) != 3:
            raise InvalidArgumentError("moeda deve ter exatamente 3 caracteres (codigo ISO)")
        object.__setattr__(self, "moeda", moeda.upper())
        object.__setattr__(self, "status", StatusPrograma(self.status))

    @classmethod
    def criar(cls, id: str, brand: str, moeda: str = MOEDA_PADRAO) -> "ProgramaDeMilhas":
        return cls(id=id, brand=brand, moeda=moeda)

    @property
    def esta_ativo(self) -> bool:
        return self.status == StatusPrograma.ATIVO

    def ativar(self) -> "ProgramaDeMilhas":
        return replace(self, status=StatusPrograma.ATIVO)

    def desativar(self) -> "ProgramaDeMilhas":
        return replace(self, status=StatusPrograma.INATIVO)

    def com_regras_arredondamento(self, nova_config: ConfigArredondamento) -> "ProgramaDeMilhas":
        return replace(self, regras_arredondamento=nova_config)
