"""
Audit log model.

Every committed balance correction leaves a record here,
written in the same database transaction as the balances.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from balance_history.models.base import Base


class AuditLog(Base):
    """
    Immutable record of a system event.

    Audit records are append-only. They are never updated
    or deleted.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_type: Mapped[str] = mapped_column(String(100), nullable=False)
    account_key: Mapped[str | None] = mapped_column(
        String(32), nullable=True, index=True
    )
    details: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False
    )
