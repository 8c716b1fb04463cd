"""Base generator class for all data generators."""

from __future__ import annotations

import random
from abc import ABC
from decimal import Decimal

from faker import Faker

CENTAVO = Decimal("0.01")


class BaseGenerator(ABC):
    """Seeded Faker plus the pricing helpers every miles generator needs.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility; seeds both Faker and ``random``.
    locale : str
        Faker locale (default ``pt_BR``).
    """

    def __init__(self, seed: int | None = None, locale: str = "pt_BR") -> None:
        self.fake = Faker(locale)
        if seed is not None:
            self.fake.seed_instance(seed)
            random.seed(seed)

    def nome_titular(self) -> str:
        """Full name of an account owner."""
        return self.fake.name()

    def valor_por_milheiro(self, milhas: int, faixa: tuple[float, float]) -> Decimal:
        """BRL amount for ``milhas`` at a random price per thousand within ``faixa``."""
        preco = Decimal(str(round(random.uniform(*faixa), 2)))
        return (preco * milhas / 1000).quantize(CENTAVO)
