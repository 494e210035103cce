from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from calorics.schemas.common import CamelModel

Gender = Literal["male", "female"]
Goal = Literal["lose", "maintain", "gain"]


def _unknown_if_zero(value: Optional[int]) -> Optional[int]:
    # clients send 0 for "not measured yet"
    if value is None or value == 0:
        return None
    return value


def _check_iso_date(value: str) -> str:
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()
    except ValueError:
        raise ValueError("must be a date in YYYY-MM-DD format")


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    gender: Gender
    birthday: str
    weight: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    waist: Optional[int] = Field(None, ge=0)
    neck: Optional[int] = Field(None, ge=0)
    hip: Optional[int] = Field(None, ge=0)
    goal: Goal = "maintain"

    @field_validator("birthday")
    @classmethod
    def validate_birthday(cls, v: str) -> str:
        return _check_iso_date(v)

    @field_validator("weight", "height", "waist", "neck", "hip")
    @classmethod
    def zero_is_unknown(cls, v: Optional[int]) -> Optional[int]:
        return _unknown_if_zero(v)


class LoginRequest(CamelModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class ProfileRead(CamelModel):
    id: int
    name: str
    email: str
    gender: str
    birthday: str
    current_weight: Optional[int] = None
    height: Optional[int] = None
    neck_measurement: Optional[int] = None
    waist_measurement: Optional[int] = None
    hip_measurement: Optional[int] = None
    goal: str
    age: int
    fat_percentage: int
    needed_calories: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProfileUpdate(CamelModel):
    """
    Only fields present in the request are changed. Measurements are whole kg / cm.
    """
    current_weight: Optional[int] = Field(None, ge=0)
    height: Optional[int] = Field(None, ge=0)
    neck_measurement: Optional[int] = Field(None, ge=0)
    waist_measurement: Optional[int] = Field(None, ge=0)
    hip_measurement: Optional[int] = Field(None, ge=0)
    goal: Optional[Goal] = None

    @field_validator(
        "current_weight", "height", "neck_measurement", "waist_measurement", "hip_measurement"
    )
    @classmethod
    def zero_is_unknown(cls, v: Optional[int]) -> Optional[int]:
        return _unknown_if_zero(v)


class ProfileUpdateResponse(CamelModel):
    fat_percentage: int
    goal: str
    needed_calories: int


class LoginResponse(CamelModel):
    token: str
    user: ProfileRead
