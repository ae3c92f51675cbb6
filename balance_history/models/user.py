"""
User model.

A user owns zero or more credit cards. Deleting a user
deletes their cards, and with each card its balance history.
"""

from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from balance_history.models.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    credit_cards: Mapped[list["CreditCard"]] = relationship(
        cascade="all, delete-orphan",
        order_by="CreditCard.id",
    )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"
