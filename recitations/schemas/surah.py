from typing import Optional

from recitations.schemas.base import CamelModel


class SurahGenderStats(CamelModel):
    gender: str
    graded_recitations: int = 0
    ungraded_recitations: int = 0
    passed_count: int = 0
    failed_count: int = 0


class SurahRow(CamelModel):
    surah: str
    male: Optional[SurahGenderStats] = None
    female: Optional[SurahGenderStats] = None
