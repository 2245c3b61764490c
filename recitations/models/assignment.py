from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

COLLECTION = "assignments"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"


GENDERS = (Gender.MALE.value, Gender.FEMALE.value)

# pass/fail breakdowns fall back to this when the assignment is missing or untagged
UNKNOWN_GENDER = "unknown"


class Assignment(BaseModel):
    id: Any = Field(alias="_id")
    name: Optional[str] = None  # surah number
    creation_date: Optional[datetime] = Field(default=None, alias="creationDate")
    is_graded: bool = Field(default=False, alias="isGraded")
    gender: Optional[str] = Field(default=None, alias="courseGenderForQuran")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @field_validator("name", mode="before")
    @classmethod
    def _name_as_str(cls, value):
        return None if value is None else str(value)

    @field_validator("is_graded", mode="before")
    @classmethod
    def _missing_is_ungraded(cls, value):
        return bool(value)

    @property
    def is_recitation(self) -> bool:
        return self.gender is not None
