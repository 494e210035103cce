from sqlalchemy import (
    Column,
    Integer,
    DateTime,
    Float,
    String,
    ForeignKey,
    func,
)
from sqlalchemy.orm import relationship

from calorics.db.base import Base


class FoodEntry(Base):
    __tablename__ = "food_entries"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    food_id = Column(Integer, ForeignKey("foods.id"), nullable=False)

    serving_desc = Column(String, nullable=False)
    quantity = Column(Float, nullable=False)

    # Calendar day as text, compared lexicographically
    date = Column(String(10), nullable=False, index=True)

    # Stored at creation time, never recomputed
    calories = Column(Float, nullable=False)

    food_set_id = Column(
        Integer, ForeignKey("food_sets.id", ondelete="CASCADE"), nullable=True, index=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="entries")
    food = relationship("Food")
    food_set = relationship("FoodSet", back_populates="entries")
