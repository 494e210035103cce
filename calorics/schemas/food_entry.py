from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from calorics.schemas.food import FoodRead


class FoodEntryCreate(BaseModel):
    food_id: int
    serving_desc: str = Field(..., min_length=1)
    quantity: float = Field(..., ge=0)
    date: Optional[str] = None  # YYYY-MM-DD, defaults to today


class DirectFoodEntryCreate(BaseModel):
    """Intake of a food that is not in the catalog."""
    name: str = Field(..., min_length=1)
    calories: int = Field(..., ge=0)  # per 100 g
    quantity: float = Field(..., ge=0)
    date: Optional[str] = None


class FoodEntryRead(BaseModel):
    id: int
    user_id: int
    food_id: int
    serving_desc: str
    quantity: float
    date: str
    calories: float
    food_set_id: Optional[int] = None
    created_at: Optional[datetime] = None
    food: Optional[FoodRead] = None

    model_config = ConfigDict(from_attributes=True)
