"""
Aggregation of logged intake against the user's daily target.
"""
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from calorics.models.food import FoodServing
from calorics.models.food_entry import FoodEntry
from calorics.models.user import User
from calorics.services import ledger
from calorics.services.dates import normalize_date, normalize_range, today
from calorics.services.measurements import derive_user_metrics

logger = logging.getLogger(__name__)

DAYS_PER_WEEK = 7


def _serving_grams(db: Session, entries: List[FoodEntry]) -> Dict[Tuple[int, str], float]:
    food_ids = {e.food_id for e in entries}
    if not food_ids:
        return {}
    servings = db.query(FoodServing).filter(FoodServing.food_id.in_(food_ids)).all()
    return {(s.food_id, s.description): s.grams for s in servings}


def macro_totals(db: Session, entries: List[FoodEntry]) -> Dict[str, float]:
    """
    Protein, carbs and fat eaten across entries, from the per-100 g catalog values.
    """
    grams_by_serving = _serving_grams(db, entries)
    totals = {"protein": 0.0, "carbs": 0.0, "fat": 0.0}
    for entry in entries:
        grams = grams_by_serving.get((entry.food_id, entry.serving_desc), 0.0)
        factor = grams * entry.quantity / 100
        food = entry.food
        totals["protein"] += (food.protein or 0) * factor
        totals["carbs"] += (food.carbohydrates or 0) * factor
        totals["fat"] += (food.fat or 0) * factor
    return totals


def daily_stats(db: Session, user: User, date: Optional[str] = None) -> dict:
    """
    Intake for one day compared with the user's target.
    Age and fat percentage are recomputed from the stored measurements.
    """
    day = normalize_date(date)
    entries = ledger.list_by_date(db, user.id, day)
    metrics = derive_user_metrics(user, today())
    macros = macro_totals(db, entries)

    daily_calories = sum(e.calories for e in entries)
    logger.debug(
        f"[STATS] Daily stats: user_id={user.id}, date={day}, "
        f"entries={len(entries)}, calories={daily_calories}"
    )

    return {
        "date": day,
        "daily_calories": daily_calories,
        "daily_protein": macros["protein"],
        "daily_carbs": macros["carbs"],
        "daily_fat": macros["fat"],
        "needed_calories": metrics["needed_calories"],
        "weight": user.weight,
        "height": user.height,
        "neck": user.neck,
        "waist": user.waist,
        "hip": user.hip,
        "fat_percentage": metrics["fat_percentage"],
        "goal": user.goal,
        "age": metrics["age"],
        "food_entries": entries,
    }


def weekly_stats(
    db: Session,
    user: User,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> dict:
    """
    Total intake over an inclusive date range as a percentage of seven daily targets.
    """
    start, end = normalize_range(start_date, end_date)

    total = (
        db.query(func.coalesce(func.sum(FoodEntry.calories), 0.0))
        .filter(
            FoodEntry.user_id == user.id,
            FoodEntry.date >= start,
            FoodEntry.date <= end,
        )
        .scalar()
    )
    total_calories = float(total or 0.0)

    metrics = derive_user_metrics(user, today())
    weekly_goal = metrics["needed_calories"] * DAYS_PER_WEEK
    if weekly_goal == 0:
        average_percentage = 0.0
    else:
        average_percentage = total_calories / weekly_goal * 100

    logger.debug(
        f"[STATS] Weekly stats: user_id={user.id}, range={start}..{end}, "
        f"total={total_calories}, goal={weekly_goal}"
    )

    return {
        "start_date": start,
        "end_date": end,
        "total_calories": total_calories,
        "weekly_goal": weekly_goal,
        "average_percentage": average_percentage,
    }
