"""
Body measurement math: age, body-fat percentage (U.S. Navy), BMR (Mifflin-St Jeor)
and the daily calorie target.

All functions are pure and never raise: missing or invalid inputs produce 0.
Measurements are Optional[int]; None means "unknown".
"""
import math
from datetime import date, datetime
from typing import Optional

GOALS = ("lose", "maintain", "gain")
GENDERS = ("male", "female")

FAT_PERCENTAGE_MIN = 5
FAT_PERCENTAGE_MAX = 50

ACTIVITY_FACTORS = {
    "lose": 1.2,
    "maintain": 1.55,
    "gain": 1.725,
}
DEFAULT_ACTIVITY_FACTOR = 1.55

CALORIE_ADJUSTMENTS = {
    "lose": -500,
    "gain": 500,
}


def _known(value: Optional[int]) -> bool:
    return value is not None and value > 0


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_age(birthday: Optional[str], today: Optional[date] = None) -> int:
    """
    Full years between birthday (YYYY-MM-DD) and today. Unparseable birthday -> 0.
    """
    if not birthday:
        return 0
    try:
        born = datetime.strptime(birthday, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        return 0

    today = today or date.today()
    age = today.year - born.year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1
    return age


def calculate_fat_percentage(
    gender: Optional[str],
    height: Optional[int],
    waist: Optional[int],
    neck: Optional[int],
    hip: Optional[int] = None,
) -> int:
    """
    U.S. Navy body-fat estimate, clamped to [5, 50] and rounded.
    Returns 0 when a required measurement is unknown.
    """
    if not (_known(waist) and _known(neck) and _known(height)):
        return 0

    if gender == "female":
        if not _known(hip):
            return 0
        girth = waist + hip - neck
        if girth <= 0:
            return 0
        denominator = 1.29579 - 0.35004 * math.log10(girth) + 0.22100 * math.log10(height)
    else:
        girth = waist - neck
        if girth <= 0:
            return 0
        denominator = 1.0324 - 0.19077 * math.log10(girth) + 0.15456 * math.log10(height)

    if denominator <= 0:
        return 0

    fat = 495 / denominator - 450
    fat = max(FAT_PERCENTAGE_MIN, min(FAT_PERCENTAGE_MAX, fat))
    return _round_half_up(fat)


def calculate_bmr(gender: Optional[str], weight: Optional[int], height: Optional[int], age: int) -> float:
    """
    Mifflin-St Jeor basal metabolic rate.
    """
    s = 5 if gender == "male" else -161
    return 10 * (weight or 0) + 6.25 * (height or 0) - 5 * age + s


def calculate_tdee(bmr: float, goal: Optional[str]) -> float:
    return bmr * ACTIVITY_FACTORS.get(goal, DEFAULT_ACTIVITY_FACTOR)


def calculate_daily_target(
    gender: Optional[str],
    weight: Optional[int],
    height: Optional[int],
    age: int,
    goal: Optional[str],
) -> int:
    """
    TDEE adjusted for the goal, truncated toward zero.
    0 when weight or height is unknown.
    """
    if not (_known(weight) and _known(height)):
        return 0

    bmr = calculate_bmr(gender, weight, height, age)
    target = calculate_tdee(bmr, goal) + CALORIE_ADJUSTMENTS.get(goal, 0)
    return int(target)


def derive_user_metrics(user, today: Optional[date] = None) -> dict:
    """
    Recompute every derived number for a user record.
    Nothing returned here is ever persisted.
    """
    age = calculate_age(user.birthday, today)
    return {
        "age": age,
        "fat_percentage": calculate_fat_percentage(
            user.gender, user.height, user.waist, user.neck, user.hip
        ),
        "bmr": calculate_bmr(user.gender, user.weight, user.height, age),
        "needed_calories": calculate_daily_target(
            user.gender, user.weight, user.height, age, user.goal
        ),
    }
