import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from calorics.api.errors import internal_error, to_http_error
from calorics.deps import get_current_user, get_db
from calorics.models.user import User
from calorics.schemas.common import MessageResponse
from calorics.schemas.food_entry import DirectFoodEntryCreate, FoodEntryCreate, FoodEntryRead
from calorics.services import ledger
from calorics.services.dates import normalize_date, normalize_range
from calorics.services.errors import CaloricsError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/food-entries", tags=["food-entries"])


@router.post("", response_model=FoodEntryRead)
def create_food_entry(
    payload: FoodEntryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Log intake of a catalog food:
    - food_id: catalog food
    - serving_desc: one of the food's serving descriptions
    - quantity: number of servings
    - date: YYYY-MM-DD, today if omitted
    """
    try:
        return ledger.append_entry(
            db,
            user.id,
            payload.food_id,
            payload.serving_desc,
            payload.quantity,
            payload.date,
        )
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[LEDGER] Error creating entry for user_id={user.id}: {e}", exc_info=True)
        raise internal_error()


@router.post("/direct", response_model=FoodEntryRead)
def create_direct_food_entry(
    payload: DirectFoodEntryCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Log intake of a food that is not in the catalog (calories per 100 g).
    """
    try:
        return ledger.append_direct_entry(
            db,
            user.id,
            payload.name,
            payload.calories,
            payload.quantity,
            payload.date,
        )
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[LEDGER] Error creating direct entry for user_id={user.id}: {e}", exc_info=True)
        raise internal_error()


@router.get("", response_model=List[FoodEntryRead])
def get_food_entries(
    date_str: Optional[str] = Query(None, alias="date"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Entries for one day (?date=, default today) or an inclusive range (?startDate=&endDate=).
    Newest first.
    """
    try:
        if start_date or end_date:
            start, end = normalize_range(start_date, end_date)
            return ledger.list_by_range(db, user.id, start, end)
        return ledger.list_by_date(db, user.id, normalize_date(date_str))
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[LEDGER] Error listing entries for user_id={user.id}: {e}", exc_info=True)
        raise internal_error()


@router.delete("/{entry_id}", response_model=MessageResponse)
def delete_food_entry(
    entry_id: int,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        ledger.delete_entry(db, user.id, entry_id)
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[LEDGER] Error deleting entry {entry_id}: {e}", exc_info=True)
        raise internal_error()

    return MessageResponse(message="Food entry deleted")
