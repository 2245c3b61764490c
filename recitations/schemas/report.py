from recitations.schemas.base import CamelModel
from recitations.schemas.daily_users import DailyUsersBreakdown, SubmissionTypeCount
from recitations.schemas.status import StatusCount, StatusGenderCount
from recitations.schemas.surah import SurahRow
from recitations.schemas.teacher import GradedByTeacherRow


class RecitationCounts(CamelModel):
    total: int = 0
    male: int = 0
    female: int = 0
    male_graded: int = 0
    female_graded: int = 0

    @property
    def graded(self) -> int:
        return self.male_graded + self.female_graded

    @property
    def ungraded(self) -> int:
        return self.total - self.graded


class DailyReport(CamelModel):
    # field order is the order keys appear in the output file
    total_recitations: int
    total_male_recitations: int
    male_recitations_as_percentage: float
    total_female_recitations: int
    female_recitations_as_percentage: float
    male_graded_recitations: int
    male_recitations_graded_as_percentage: float
    female_graded_recitations: int
    female_recitations_graded_as_percentage: float
    total_graded_recitations: int
    total_ungraded_recitations: int
    ungraded_recitations_as_percentage: float
    total_recitations_graded_by_teacher: list[GradedByTeacherRow]
    total_daily_users: list[DailyUsersBreakdown]
    multi_recitation_students: list[SubmissionTypeCount]
    assignments_categorized_by_status: list[StatusCount]
    assignments_categorized_by_status_and_gender: list[StatusGenderCount]
    assignments_categorized_by_surah: list[SurahRow]

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, indent=2, exclude_none=True)
