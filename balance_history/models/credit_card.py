"""
Credit card model.

The card is the account whose balance history is tracked.
It is addressed from the outside by its card number, never
by the internal id. The card owns its balance history rows:
they are created empty with the card and removed with it.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from balance_history.models.base import Base


class CreditCard(Base):
    __tablename__ = "credit_cards"

    id: Mapped[int] = mapped_column(primary_key=True)
    number: Mapped[str] = mapped_column(
        String(32), unique=True, nullable=False, index=True
    )
    issuance_bank: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    # One direction only: entries hold the foreign key but no
    # relationship back to the card.
    balance_entries: Mapped[list["BalanceHistoryEntry"]] = relationship(
        cascade="all, delete-orphan",
        order_by="BalanceHistoryEntry.date",
    )

    def __repr__(self) -> str:
        return f"<CreditCard {self.number} ({self.issuance_bank})>"
