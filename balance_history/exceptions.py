"""
Errors raised by the balance ledger and the services around it.

They all derive from ValueError, so API handlers written as
``except ValueError`` keep mapping them to client errors.
"""

from balance_history.models.enums import CorrectionErrorReason


class BalanceHistoryError(ValueError):
    """Base class for every domain error in this package."""

    reason: CorrectionErrorReason | None = None


class AccountNotFound(BalanceHistoryError):
    """No credit card, and therefore no ledger, exists for the key."""

    reason = CorrectionErrorReason.ACCOUNT_NOT_FOUND

    def __init__(self, account_key: str):
        self.account_key = account_key
        super().__init__(
            f"Credit card with number {account_key} does not exist"
        )


class PersistenceFailure(BalanceHistoryError):
    """The record store rejected a write; nothing was committed."""

    reason = CorrectionErrorReason.PERSISTENCE_FAILURE

    def __init__(self, account_key: str, cause: Exception):
        self.account_key = account_key
        self.cause = cause
        super().__init__(
            f"Could not persist balance history for {account_key}: {cause}"
        )


class InvalidDate(BalanceHistoryError):
    reason = CorrectionErrorReason.INVALID_DATE


class InvalidAmount(BalanceHistoryError):
    reason = CorrectionErrorReason.INVALID_AMOUNT
