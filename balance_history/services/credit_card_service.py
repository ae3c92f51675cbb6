"""
Credit card service: attaches cards to users and looks them up.

A card's balance ledger starts empty when the card is added;
nothing here touches balances.
"""

from sqlalchemy import select
from sqlalchemy.orm import Session

from balance_history.exceptions import AccountNotFound
from balance_history.models.credit_card import CreditCard
from balance_history.schemas.credit_card import CreditCardCreate
from balance_history.services.user_service import UserService


class CreditCardService:

    def __init__(self, db: Session):
        self.db = db
        self.user_service = UserService(db)

    def add_credit_card(self, request: CreditCardCreate) -> CreditCard:
        """
        Add a credit card to an existing user.

        Raises ValueError if the user does not exist or the
        card number is already registered.
        """
        user = self.user_service.get_user(request.user_id)

        existing = self.db.execute(
            select(CreditCard).where(CreditCard.number == request.card_number)
        ).scalar_one_or_none()
        if existing:
            raise ValueError(
                f"Credit card with number {request.card_number} already exists"
            )

        card = CreditCard(
            number=request.card_number,
            issuance_bank=request.card_issuance_bank,
            user_id=user.id,
        )
        self.db.add(card)
        self.db.flush()
        return card

    def get_cards_for_user(self, user_id: int) -> list[CreditCard]:
        """All cards of a user, in the order they were added."""
        user = self.user_service.get_user(user_id)
        return list(user.credit_cards)

    def get_card_by_number(self, number: str) -> CreditCard:
        card = self.db.execute(
            select(CreditCard).where(CreditCard.number == number)
        ).scalar_one_or_none()
        if card is None:
            raise AccountNotFound(number)
        return card

    def get_user_id_for_card(self, number: str) -> int:
        return self.get_card_by_number(number).user_id
