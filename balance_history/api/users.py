"""
User API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from balance_history.models.base import get_db
from balance_history.services.user_service import UserService
from balance_history.services.credit_card_service import CreditCardService
from balance_history.schemas.user import UserCreate, UserResponse
from balance_history.schemas.credit_card import CreditCardView

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", response_model=UserResponse, status_code=201)
def create_user(
    request: UserCreate,
    db: Session = Depends(get_db),
):
    """Create a new user."""
    service = UserService(db)
    try:
        user = service.create_user(request)
        db.commit()
        return user
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    db: Session = Depends(get_db),
):
    """Get user details."""
    service = UserService(db)
    try:
        return service.get_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete a user.

    The user's credit cards and their balance histories
    are deleted with it.
    """
    service = UserService(db)
    try:
        service.delete_user(user_id)
        db.commit()
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return {"detail": f"User with ID {user_id} deleted successfully"}


@router.get("/{user_id}/credit-cards", response_model=list[CreditCardView])
def get_user_credit_cards(
    user_id: int,
    db: Session = Depends(get_db),
):
    """List a user's credit cards."""
    service = CreditCardService(db)
    try:
        return service.get_cards_for_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
