from calorics.db.base import Base

# Import every model so Base.metadata and Alembic see all tables
from calorics.models.user import User  # noqa
from calorics.models.food import Food, FoodServing  # noqa
from calorics.models.food_entry import FoodEntry  # noqa
from calorics.models.food_set import FoodSet  # noqa
