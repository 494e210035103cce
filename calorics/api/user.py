import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from calorics.api.errors import internal_error, to_http_error
from calorics.deps import get_current_user, get_db
from calorics.models.user import User
from calorics.schemas.stats import DailyStats, WeeklyStats
from calorics.schemas.user import ProfileRead, ProfileUpdate, ProfileUpdateResponse
from calorics.services import stats
from calorics.services.errors import CaloricsError
from calorics.services.profile import build_profile, update_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile", response_model=ProfileRead)
def get_profile(user: User = Depends(get_current_user)):
    return build_profile(user)


@router.put("/profile", response_model=ProfileUpdateResponse)
def put_profile(
    payload: ProfileUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Update measurements and goal; returns the recomputed fat percentage and calorie target.
    """
    changes = payload.model_dump(exclude_unset=True)
    try:
        return update_profile(db, user, changes)
    except Exception as e:
        logger.error(f"[PROFILE] Error updating user_id={user.id}: {e}", exc_info=True)
        raise internal_error()


@router.get("/stats", response_model=DailyStats)
def get_daily_stats(
    date_str: Optional[str] = Query(None, alias="date", description="YYYY-MM-DD, defaults to today"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return stats.daily_stats(db, user, date_str)
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[STATS] Error in get_daily_stats: {e}", exc_info=True)
        raise internal_error()


@router.get("/weekly-stats", response_model=WeeklyStats)
def get_weekly_stats(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Total intake over [startDate, endDate] against seven daily targets.
    Without bounds, the seven days ending today.
    """
    try:
        return stats.weekly_stats(db, user, start_date, end_date)
    except CaloricsError as e:
        raise to_http_error(e)
    except Exception as e:
        logger.error(f"[STATS] Error in get_weekly_stats: {e}", exc_info=True)
        raise internal_error()
