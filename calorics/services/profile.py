import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from calorics.models.user import User
from calorics.services.dates import today
from calorics.services.measurements import derive_user_metrics

logger = logging.getLogger(__name__)

# API field -> User column
PROFILE_FIELDS = {
    "current_weight": "weight",
    "height": "height",
    "neck_measurement": "neck",
    "waist_measurement": "waist",
    "hip_measurement": "hip",
    "goal": "goal",
}


def build_profile(user: User) -> Dict[str, Any]:
    """
    Profile with freshly derived age, fat percentage and calorie target.
    """
    metrics = derive_user_metrics(user, today())
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "gender": user.gender,
        "birthday": user.birthday,
        "current_weight": user.weight,
        "height": user.height,
        "neck_measurement": user.neck,
        "waist_measurement": user.waist,
        "hip_measurement": user.hip,
        "goal": user.goal,
        "age": metrics["age"],
        "fat_percentage": metrics["fat_percentage"],
        "needed_calories": metrics["needed_calories"],
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def update_profile(db: Session, user: User, changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply measurement/goal changes and return the recomputed targets.
    A goal of None in `changes` leaves the stored goal untouched.
    """
    for field, column in PROFILE_FIELDS.items():
        if field not in changes:
            continue
        if column == "goal" and changes[field] is None:
            continue
        setattr(user, column, changes[field])

    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(user)

    metrics = derive_user_metrics(user, today())
    logger.info(
        f"[PROFILE] Updated user_id={user.id}: fat={metrics['fat_percentage']}, "
        f"needed={metrics['needed_calories']}, goal={user.goal}"
    )
    return {
        "fat_percentage": metrics["fat_percentage"],
        "goal": user.goal,
        "needed_calories": metrics["needed_calories"],
    }
