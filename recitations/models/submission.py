from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

COLLECTION = "assignmentpassdatas"


class Status(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    NEITHER = "neither"


GRADED_STATUSES = (Status.PASSED.value, Status.FAILED.value)


def tri_status(status: Optional[str]) -> str:
    """Collapse a stored status into passed / failed / neither."""
    if status == Status.PASSED.value:
        return Status.PASSED.value
    if status == Status.FAILED.value:
        return Status.FAILED.value
    return Status.NEITHER.value


class AssignmentPassData(BaseModel):
    """One student submission against an assignment."""

    id: Any = Field(alias="_id")
    student: Any = None
    assignment: Any = None
    teacher: Any = None
    status: Optional[str] = "initial"
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @property
    def tri_status(self) -> str:
        return tri_status(self.status)
