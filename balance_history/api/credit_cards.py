"""
Credit card API endpoints.

Cards are addressed by card number. Balance reads and history
go through the card's ledger; corrections are submitted as a
batch and reported item by item.
"""

import datetime

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from balance_history.exceptions import AccountNotFound
from balance_history.models.base import get_db
from balance_history.models.enums import CorrectionStatus
from balance_history.services.balance_service import BalanceService
from balance_history.services.credit_card_service import CreditCardService
from balance_history.schemas.balance import (
    BalanceCorrection,
    BalanceResponse,
    CorrectionBatchResponse,
)
from balance_history.schemas.credit_card import (
    CreditCardCreate,
    CreditCardResponse,
    CardOwnerResponse,
)

router = APIRouter(prefix="/credit-cards", tags=["Credit Cards"])


@router.post("", response_model=CreditCardResponse, status_code=201)
def add_credit_card(
    request: CreditCardCreate,
    db: Session = Depends(get_db),
):
    """Add a credit card to a user. Its balance history starts empty."""
    service = CreditCardService(db)
    try:
        card = service.add_credit_card(request)
        db.commit()
        return card
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/balances", response_model=CorrectionBatchResponse)
def update_balances(
    requests: list[BalanceCorrection],
    db: Session = Depends(get_db),
):
    """
    Apply a batch of balance corrections.

    Each item is committed on its own. An unknown card number
    fails that item only; the response lists every item's outcome
    in request order.
    """
    service = BalanceService(db)
    results = service.apply_corrections(requests)
    succeeded = sum(1 for r in results if r.status == CorrectionStatus.OK)
    return CorrectionBatchResponse(
        succeeded=succeeded,
        failed=len(results) - succeeded,
        results=results,
    )


@router.get("/{card_number}/user", response_model=CardOwnerResponse)
def get_card_owner(
    card_number: str,
    db: Session = Depends(get_db),
):
    """Get the ID of the user who owns a card."""
    service = CreditCardService(db)
    try:
        user_id = service.get_user_id_for_card(card_number)
    except AccountNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return CardOwnerResponse(number=card_number, user_id=user_id)


@router.get("/{card_number}/balance", response_model=BalanceResponse)
def get_balance(
    card_number: str,
    date: datetime.date | None = None,
    db: Session = Depends(get_db),
):
    """
    Get a card's effective balance as of a date (default today).

    Dates without a record inherit the latest earlier balance.
    """
    on = date or datetime.date.today()
    service = BalanceService(db)
    try:
        balance = service.get_balance(card_number, on)
    except AccountNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return BalanceResponse(account_key=card_number, date=on, balance=balance)


@router.get("/{card_number}/balance-history", response_class=PlainTextResponse)
def get_balance_history(
    card_number: str,
    db: Session = Depends(get_db),
):
    """Get a card's balance history, one ``date: amount`` line per day, newest first."""
    service = BalanceService(db)
    try:
        return service.get_history(card_number)
    except AccountNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
