"""
User service: creates, fetches and deletes users.
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from balance_history.models.user import User
from balance_history.schemas.user import UserCreate

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: Session):
        self.db = db

    def create_user(self, request: UserCreate) -> User:
        """Create a new user. Raises ValueError on a duplicate email."""
        existing = self.db.execute(
            select(User).where(User.email == request.email)
        ).scalar_one_or_none()

        if existing:
            raise ValueError(f"User with email '{request.email}' already exists")

        user = User(name=request.name, email=request.email)
        self.db.add(user)
        self.db.flush()
        return user

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise ValueError(f"User with ID {user_id} does not exist")
        return user

    def delete_user(self, user_id: int) -> None:
        """
        Delete a user together with their credit cards.

        Each card takes its balance history with it.
        """
        user = self.get_user(user_id)
        card_count = len(user.credit_cards)
        self.db.delete(user)
        self.db.flush()
        logger.info("Deleted user %s and %d credit card(s)", user_id, card_count)
