"""
Intake calculator: resolves a serving's gram weight and yields calories for one entry.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from calorics.models.food import Food, FoodServing
from calorics.models.food_entry import FoodEntry
from calorics.services.dates import normalize_date
from calorics.services.errors import UnknownFoodError, UnknownServingError

logger = logging.getLogger(__name__)


def entry_calories(calories_per_100g: int, grams: float, quantity: float) -> float:
    """
    Calories for `quantity` servings of `grams` each. No rounding.
    """
    return calories_per_100g * grams * quantity / 100


def get_food(db: Session, food_id: int) -> Food:
    food = (
        db.query(Food)
        .filter(Food.id == food_id, Food.deleted_at.is_(None))
        .first()
    )
    if not food:
        raise UnknownFoodError(f"Food {food_id} does not exist")
    return food


def get_serving(db: Session, food_id: int, serving_desc: str) -> FoodServing:
    serving = (
        db.query(FoodServing)
        .filter(FoodServing.food_id == food_id, FoodServing.description == serving_desc)
        .first()
    )
    if not serving:
        raise UnknownServingError(f"Serving '{serving_desc}' does not exist for food {food_id}")
    return serving


def build_entry(
    db: Session,
    user_id: int,
    food_id: int,
    serving_desc: str,
    quantity: float,
    date: Optional[str] = None,
) -> FoodEntry:
    """
    Validate the intake and return an unsaved FoodEntry with its calories computed.

    Raises UnknownFoodError, UnknownServingError or BadDateError.
    """
    food = get_food(db, food_id)
    serving = get_serving(db, food.id, serving_desc)
    calories = entry_calories(food.calories, serving.grams, quantity)
    entry_date = normalize_date(date)

    logger.debug(
        f"[INTAKE] user_id={user_id} food_id={food.id} serving='{serving_desc}' "
        f"grams={serving.grams} quantity={quantity} calories={calories}"
    )

    entry = FoodEntry(
        user_id=user_id,
        food_id=food.id,
        serving_desc=serving.description,
        quantity=quantity,
        date=entry_date,
        calories=calories,
    )
    entry.food = food
    return entry
