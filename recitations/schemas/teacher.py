from typing import Any

from recitations.schemas.base import CamelModel


class GradedByTeacherRow(CamelModel):
    count: int
    teacher: dict[str, Any]
