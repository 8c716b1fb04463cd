"""Custom exception hierarchy for milhas-ledger."""


class MilhasLedgerError(Exception):
    """Base exception for all milhas-ledger errors."""


class NullArgumentError(MilhasLedgerError, TypeError):
    """Raised when a required argument is missing (None)."""


class InvalidArgumentError(MilhasLedgerError, ValueError):
    """Raised when an argument violates a domain precondition."""


class InsufficientBalanceError(MilhasLedgerError):
    """Raised when a sale requests more miles than the account holds."""

    def __init__(self, programa_id: str, saldo_atual: int, milhas_solicitadas: int) -> None:
        super().__init__(
            f"Saldo de milhas insuficiente no programa {programa_id}: "
            f"saldo atual = {saldo_atual}, solicitado = {milhas_solicitadas}"
        )
        self.programa_id = programa_id
        self.saldo_atual = saldo_atual
        self.milhas_solicitadas = milhas_solicitadas

    @property
    def deficit(self) -> int:
        """Miles missing to fulfil the request."""
        return self.milhas_solicitadas - self.saldo_atual


class InvariantViolationError(MilhasLedgerError):
    """Raised when a rehydrated account violates the ledger invariants."""


class EntityNotFoundError(MilhasLedgerError):
    """Raised when a referenced entity does not exist."""


class AccountNotFoundError(EntityNotFoundError):
    """Raised when no program account matches the lookup."""


class LotNotFoundError(EntityNotFoundError):
    """Raised when a miles lot does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a foreign key reference is violated."""


class DuplicateEntityError(MilhasLedgerError):
    """Raised when an entity would be stored twice."""


class ConfigurationError(MilhasLedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(MilhasLedgerError):
    """Raised when a sink operation fails."""
