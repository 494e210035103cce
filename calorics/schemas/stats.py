from typing import List, Optional

from calorics.schemas.common import CamelModel
from calorics.schemas.food_entry import FoodEntryRead


class DailyStats(CamelModel):
    date: str
    daily_calories: float
    daily_protein: float
    daily_carbs: float
    daily_fat: float
    needed_calories: int
    weight: Optional[int] = None
    height: Optional[int] = None
    neck: Optional[int] = None
    waist: Optional[int] = None
    hip: Optional[int] = None
    fat_percentage: int
    goal: str
    age: int
    food_entries: List[FoodEntryRead] = []


class WeeklyStats(CamelModel):
    start_date: str
    end_date: str
    total_calories: float
    weekly_goal: int
    average_percentage: float
