"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from balance_history.models.base import Base
from balance_history.models.enums import (
    CorrectionStatus,
    CorrectionErrorReason,
)
from balance_history.models.audit_log import AuditLog
from balance_history.models.user import User
from balance_history.models.credit_card import CreditCard
from balance_history.models.balance_history import BalanceHistoryEntry

__all__ = [
    "Base",
    "CorrectionStatus",
    "CorrectionErrorReason",
    "AuditLog",
    "User",
    "CreditCard",
    "BalanceHistoryEntry",
]
