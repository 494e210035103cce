from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from calorics.schemas.food_entry import FoodEntryCreate, FoodEntryRead


class FoodSetCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    entries: List[FoodEntryCreate] = []


class FoodSetRead(BaseModel):
    id: int
    user_id: int
    name: str
    description: str
    created_at: Optional[datetime] = None
    entries: List[FoodEntryRead] = []

    model_config = ConfigDict(from_attributes=True)
