from recitations.schemas.base import CamelModel


class GenderTotals(CamelModel):
    male: int = 0
    female: int = 0
    total: int = 0


class DailyUsersBreakdown(CamelModel):
    new_students: GenderTotals
    old_students: GenderTotals
    total_students: int


class SubmissionTypeCount(CamelModel):
    submission_type: str  # "single" | "multiple"
    count: int
