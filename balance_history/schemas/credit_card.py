"""
Pydantic schemas for credit card operations.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class CreditCardCreate(BaseModel):
    """Request to add a credit card to a user."""
    user_id: int
    card_issuance_bank: str = Field(min_length=1, max_length=100)
    card_number: str = Field(min_length=1, max_length=32)


class CreditCardResponse(BaseModel):
    id: int
    user_id: int
    issuance_bank: str
    number: str
    created_at: datetime

    model_config = {"from_attributes": True}


class CreditCardView(BaseModel):
    """Public view of a card in a user's card list."""
    issuance_bank: str
    number: str

    model_config = {"from_attributes": True}


class CardOwnerResponse(BaseModel):
    number: str
    user_id: int
