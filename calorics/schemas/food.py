from typing import List

from pydantic import BaseModel, ConfigDict


class FoodServingRead(BaseModel):
    id: int
    food_id: int
    description: str
    grams: float

    model_config = ConfigDict(from_attributes=True)


class FoodRead(BaseModel):
    id: int
    name: str
    calories: int
    protein: float
    carbohydrates: float
    fat: float
    serving_size: float
    category: str
    servings: List[FoodServingRead] = []

    model_config = ConfigDict(from_attributes=True)
