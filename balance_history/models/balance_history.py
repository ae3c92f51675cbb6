"""
Balance history entry model.

One row per (card, date). The unique constraint backs the
ledger rule that a date appears at most once: writing a
balance for a date that already has a row updates that row.
"""

import datetime
from decimal import Decimal

from sqlalchemy import (
    Date, DateTime, Numeric, ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from balance_history.models.base import Base


class BalanceHistoryEntry(Base):
    __tablename__ = "balance_history"
    __table_args__ = (
        UniqueConstraint(
            "credit_card_id", "date", name="uq_balance_history_card_date"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    credit_card_id: Mapped[int] = mapped_column(
        ForeignKey("credit_cards.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Module-qualified annotations: the "date" attribute shadows
    # the type name inside the class body.
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime,
        nullable=False,
        default=datetime.datetime.utcnow,
        onupdate=datetime.datetime.utcnow,
    )

    def __repr__(self) -> str:
        return f"<BalanceHistoryEntry {self.date}: {self.amount}>"
