from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship

from calorics.db.base import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)

    gender = Column(String, nullable=False)       # male / female
    birthday = Column(String(10), nullable=False)  # YYYY-MM-DD

    # Measurements: NULL means unknown
    weight = Column(Integer, nullable=True)   # kg
    height = Column(Integer, nullable=True)   # cm
    waist = Column(Integer, nullable=True)    # cm
    neck = Column(Integer, nullable=True)     # cm
    hip = Column(Integer, nullable=True)      # cm

    goal = Column(String, nullable=False, default="maintain")  # lose / maintain / gain

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    entries = relationship("FoodEntry", back_populates="user")
    food_sets = relationship("FoodSet", back_populates="user")
