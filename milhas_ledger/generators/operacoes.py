"""Random ledger operations and miles lots."""

import random
from collections.abc import Iterator
from dataclasses import dataclass
from decimal import Decimal

from milhas_ledger.generators.base import BaseGenerator
from milhas_ledger.models import Milhas, TipoProgramaMilhas, TipoTransacao


@dataclass(frozen=True)
class Operacao:
    """One operation to replay against an account."""

    tipo: TipoTransacao
    milhas: int
    valor: Decimal
    fonte: str | None = None


class OperacaoGenerator(BaseGenerator):
    """Generate valid compra/bonus/venda sequences.

    The generator tracks the running balance it has produced so far and
    never emits a venda larger than that balance.
    """

    TIPOS = [TipoTransacao.COMPRA, TipoTransacao.BONUS, TipoTransacao.VENDA]
    PESOS = [0.50, 0.20, 0.30]

    FONTES_COMPRA = ["Site do programa", "Compra direta", "Clube", "Transferencia de pontos"]
    FONTES_BONUS = ["Cartao de credito", "Promocao", "Cashback", "Indicacao"]

    # Price per thousand miles, BRL
    PRECO_MILHEIRO_COMPRA = (14.0, 35.0)
    PRECO_MILHEIRO_VENDA = (16.0, 30.0)

    def generate(self, saldo_atual: int = 0) -> Operacao:
        """Generate one operation valid for an account holding ``saldo_atual`` miles."""
        tipo = random.choices(self.TIPOS, weights=self.PESOS, k=1)[0]
        if tipo == TipoTransacao.VENDA and saldo_atual <= 0:
            tipo = TipoTransacao.COMPRA

        if tipo == TipoTransacao.COMPRA:
            milhas = random.randint(1, 100) * 1000
            valor = self.valor_por_milheiro(milhas, self.PRECO_MILHEIRO_COMPRA)
            return Operacao(tipo, milhas, valor, random.choice(self.FONTES_COMPRA))

        if tipo == TipoTransacao.BONUS:
            milhas = random.randint(1, 20) * 500
            return Operacao(tipo, milhas, Decimal(0), random.choice(self.FONTES_BONUS))

        # Mostly partial sales, sometimes the whole balance
        if random.random() < 0.1:
            milhas = saldo_atual
        else:
            milhas = random.randint(1, saldo_atual)
        return Operacao(tipo, milhas, self.valor_por_milheiro(milhas, self.PRECO_MILHEIRO_VENDA))

    def generate_sequence(self, count: int, saldo_inicial: int = 0) -> Iterator[Operacao]:
        """Yield ``count`` operations, each valid after the previous ones."""
        saldo = saldo_inicial
        for _ in range(count):
            operacao = self.generate(saldo)
            if operacao.tipo == TipoTransacao.VENDA:
                saldo -= operacao.milhas
            else:
                saldo += operacao.milhas
            yield operacao


class LoteGenerator(BaseGenerator):
    """Generate miles lots (``Milhas``)."""

    PROGRAMAS = list(TipoProgramaMilhas)
    PRECO_MILHEIRO = (14.0, 35.0)

    def generate(self, programa: TipoProgramaMilhas | None = None) -> Milhas:
        quantidade = random.randint(1, 200) * 500
        return Milhas.criar(
            programa or random.choice(self.PROGRAMAS),
            quantidade,
            self.valor_por_milheiro(quantidade, self.PRECO_MILHEIRO),
        )

    def generate_batch(self, count: int) -> list[Milhas]:
        return [self.generate() for _ in range(count)]
