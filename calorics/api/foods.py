import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from calorics.api.errors import internal_error
from calorics.deps import get_current_user_id, get_db
from calorics.schemas.food import FoodRead
from calorics.services.catalog import list_foods

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["foods"])


@router.get("/foods", response_model=List[FoodRead])
def get_foods(
    q: Optional[str] = Query(None, description="Case-insensitive name filter"),
    limit: Optional[int] = Query(None, ge=1, le=5000),
    _user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    The food catalog with every food's servings.
    """
    try:
        return list_foods(db, q, limit)
    except Exception as e:
        logger.error(f"[FOODS] Error listing foods: {e}", exc_info=True)
        raise internal_error()
