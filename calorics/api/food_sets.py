import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from calorics.api.errors import internal_error, to_http_error
from calorics.deps import get_current_user, get_db
from calorics.models.user import User
from calorics.schemas.common import MessageResponse
from calorics.schemas.food_entry import FoodEntryRead
from calorics.schemas.food_set import FoodSetCreate, FoodSetRead
from calorics.services import ledger
from calorics.services.errors import CaloricsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/food-sets", tags=["food-sets"])


@router.post("", response_model=FoodSetRead)
def create_food_set(
    payload: FoodSetCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return ledger.create_set(db, user.id, payload.name, payload.description, payload.entries)
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[FOOD_SETS] Error creating set for user_id={user.id}: {e}", exc_info=True)
        raise internal_error()


@router.get("", response_model=List[FoodSetRead])
def get_food_sets(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return ledger.list_sets(db, user.id)
    except Exception as e:
        logger.error(f"[FOOD_SETS] Error listing sets for user_id={user.id}: {e}", exc_info=True)
        raise internal_error()


@router.post("/{set_id}/apply", response_model=List[FoodEntryRead])
def apply_food_set(
    set_id: int,
    date_str: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD, defaults to today"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Clone the set's entries onto the given day. Returns the new entries.
    """
    try:
        return ledger.apply_set(db, user.id, set_id, date_str)
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[FOOD_SETS] Error applying set {set_id}: {e}", exc_info=True)
        raise internal_error()


@router.delete("/{set_id}", response_model=MessageResponse)
def delete_food_set(
    set_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        ledger.delete_set(db, user.id, set_id)
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[FOOD_SETS] Error deleting set {set_id}: {e}", exc_info=True)
        raise internal_error()

    return MessageResponse(message="Food set deleted")
