from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship

from calorics.db.base import Base


class FoodSet(Base):
    __tablename__ = "food_sets"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="food_sets")
    entries = relationship(
        "FoodEntry",
        back_populates="food_set",
        order_by="FoodEntry.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
