from sqlalchemy import Column, Integer, String, DateTime, Float, ForeignKey, func
from sqlalchemy.orm import relationship

from calorics.db.base import Base


class Food(Base):
    __tablename__ = "foods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)

    # All nutrition values are per 100 g
    calories = Column(Integer, nullable=False, default=0)
    protein = Column(Float, default=0)
    carbohydrates = Column(Float, default=0)
    fat = Column(Float, default=0)

    serving_size = Column(Float, nullable=False, default=100)  # grams
    category = Column(String, nullable=False, default="General")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    servings = relationship(
        "FoodServing",
        back_populates="food",
        order_by="FoodServing.id",
        cascade="all, delete-orphan",
    )


class FoodServing(Base):
    __tablename__ = "food_servings"

    id = Column(Integer, primary_key=True, index=True)
    food_id = Column(
        Integer, ForeignKey("foods.id", ondelete="CASCADE"), nullable=False, index=True
    )
    description = Column(String, nullable=False)
    grams = Column(Float, nullable=False)

    food = relationship("Food", back_populates="servings")
