"""
Pydantic schemas for balance reads and corrections.

Malformed dates and amounts are rejected here, before any
ledger is read or written.
"""

import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from balance_history.models.enums import CorrectionStatus, CorrectionErrorReason


# --- Request Schemas ---

class BalanceCorrection(BaseModel):
    """Set the balance of one card on one date."""
    account_key: str = Field(min_length=1, max_length=32)
    date: datetime.date
    amount: Decimal = Field(max_digits=19, decimal_places=4)


# --- Response Schemas ---

class BalanceResponse(BaseModel):
    """Effective balance of a card as of a date."""
    account_key: str
    date: datetime.date
    balance: Decimal


class CorrectionItemResult(BaseModel):
    """Per-item result of a correction batch."""
    account_key: str
    date: datetime.date
    status: CorrectionStatus
    reason: CorrectionErrorReason | None = None
    detail: str | None = None
    previous_balance: Decimal | None = None
    delta: Decimal | None = None
    days_propagated: int = 0


class CorrectionBatchResponse(BaseModel):
    """Response after applying a batch of corrections."""
    succeeded: int
    failed: int
    results: list[CorrectionItemResult]
