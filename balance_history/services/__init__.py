"""Business logic services."""

from balance_history.services.balance_ledger import BalanceLedger, BalanceRecord
from balance_history.services.corrections import CorrectionOutcome, apply_correction
from balance_history.services.ledger_store import LedgerStore
from balance_history.services.balance_service import BalanceService
from balance_history.services.user_service import UserService
from balance_history.services.credit_card_service import CreditCardService

__all__ = [
    "BalanceLedger",
    "BalanceRecord",
    "CorrectionOutcome",
    "apply_correction",
    "LedgerStore",
    "BalanceService",
    "UserService",
    "CreditCardService",
]
