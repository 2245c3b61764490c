"""
Report metrics as plain group-by / join / filter steps.

Every function here is pure: it takes documents already narrowed to the
reporting window by RecitationStore and returns report rows.
"""
from collections import Counter, defaultdict
from datetime import datetime
from typing import Any, Iterable, Optional

from recitations.models.assignment import GENDERS, UNKNOWN_GENDER, Assignment, Gender
from recitations.models.submission import AssignmentPassData, Status
from recitations.models.user import public_profile
from recitations.schemas.daily_users import (
    DailyUsersBreakdown,
    GenderTotals,
    SubmissionTypeCount,
)
from recitations.schemas.report import RecitationCounts
from recitations.schemas.status import StatusCount, StatusGenderCount
from recitations.schemas.surah import SurahGenderStats, SurahRow
from recitations.schemas.teacher import GradedByTeacherRow

STATUS_ORDER = [s.value for s in Status]
GENDER_ORDER = [*GENDERS, UNKNOWN_GENDER]


def percentage(part: int, total: int) -> float:
    if not total:
        return 0.0
    return part / total * 100


def recitation_percentages(counts: RecitationCounts) -> dict[str, float]:
    return {
        "male_recitations_as_percentage": percentage(counts.male, counts.total),
        "female_recitations_as_percentage": percentage(counts.female, counts.total),
        "male_recitations_graded_as_percentage": percentage(
            counts.male_graded, counts.total
        ),
        "female_recitations_graded_as_percentage": percentage(
            counts.female_graded, counts.total
        ),
        "ungraded_recitations_as_percentage": percentage(
            counts.ungraded, counts.total
        ),
    }


def graded_by_teacher(
    submissions: Iterable[AssignmentPassData], teachers: dict[Any, dict]
) -> list[GradedByTeacherRow]:
    counts = Counter(s.teacher for s in submissions if s.teacher is not None)

    rows: list[GradedByTeacherRow] = []
    for teacher_id, count in counts.items():
        profile = teachers.get(teacher_id)
        if profile is None:
            # no user record to join against
            continue
        rows.append(GradedByTeacherRow(count=count, teacher=public_profile(profile)))

    rows.sort(key=lambda r: (-r.count, str(r.teacher.get("_id", ""))))
    return rows


def first_submissions(
    recitations: Iterable[Assignment], submissions: Iterable[AssignmentPassData]
) -> dict[Any, tuple[datetime, str]]:
    """Earliest submission per student and the gender of its assignment."""
    genders = {a.id: a.gender for a in recitations if a.is_recitation}

    first: dict[Any, tuple[datetime, str]] = {}
    for s in submissions:
        gender = genders.get(s.assignment)
        if gender is None or s.student is None or s.created_at is None:
            continue
        seen = first.get(s.student)
        if seen is None or s.created_at < seen[0]:
            first[s.student] = (s.created_at, gender)
    return first


def daily_users(
    first: dict[Any, tuple[datetime, str]], returning_students: set
) -> list[DailyUsersBreakdown]:
    if not first:
        return []

    tally: Counter = Counter()
    for student, (_, gender) in first.items():
        is_new = student not in returning_students
        tally[(is_new, gender)] += 1

    def totals(is_new: bool) -> GenderTotals:
        male = tally[(is_new, Gender.MALE.value)]
        female = tally[(is_new, Gender.FEMALE.value)]
        return GenderTotals(male=male, female=female, total=male + female)

    new_students = totals(True)
    old_students = totals(False)
    return [
        DailyUsersBreakdown(
            new_students=new_students,
            old_students=old_students,
            total_students=new_students.total + old_students.total,
        )
    ]


def multi_submission_students(
    submissions: Iterable[AssignmentPassData],
) -> list[SubmissionTypeCount]:
    per_student = Counter(s.student for s in submissions)
    kinds = Counter("single" if n == 1 else "multiple" for n in per_student.values())
    return [
        SubmissionTypeCount(submission_type=kind, count=kinds[kind])
        for kind in ("single", "multiple")
        if kinds[kind]
    ]


def status_breakdown(submissions: Iterable[AssignmentPassData]) -> list[StatusCount]:
    counts = Counter(s.tri_status for s in submissions)
    return [
        StatusCount(status=status, count=counts[status])
        for status in STATUS_ORDER
        if counts[status]
    ]


def _gender_of(assignment: Optional[Assignment]) -> str:
    if assignment is None or assignment.gender is None:
        return UNKNOWN_GENDER
    return assignment.gender


def status_by_gender(
    submissions: Iterable[AssignmentPassData], assignments: dict[Any, Assignment]
) -> list[StatusGenderCount]:
    counts = Counter(
        (s.tri_status, _gender_of(assignments.get(s.assignment))) for s in submissions
    )

    def order(key):
        status, gender = key
        g = GENDER_ORDER.index(gender) if gender in GENDER_ORDER else len(GENDER_ORDER)
        return (STATUS_ORDER.index(status), g, gender)

    return [
        StatusGenderCount(status=status, gender=gender, count=counts[(status, gender)])
        for status, gender in sorted(counts, key=order)
    ]


def _surah_sort_key(surah: str):
    # numeric surahs first in numeric order; anything else after, lexically
    try:
        return (0, int(surah), "")
    except (TypeError, ValueError):
        return (1, 0, surah)


def surah_breakdown(
    recitations: Iterable[Assignment], submissions: Iterable[AssignmentPassData]
) -> list[SurahRow]:
    outcomes: dict[Any, Counter] = defaultdict(Counter)
    for s in submissions:
        outcomes[s.assignment][s.tri_status] += 1

    rows: dict[str, SurahRow] = {}
    for a in recitations:
        if a.gender not in GENDERS:
            continue
        surah = a.name or ""
        row = rows.setdefault(surah, SurahRow(surah=surah))

        stats = getattr(row, a.gender)
        if stats is None:
            stats = SurahGenderStats(gender=a.gender)
            setattr(row, a.gender, stats)

        if a.is_graded:
            stats.graded_recitations += 1
        else:
            stats.ungraded_recitations += 1
        stats.passed_count += outcomes[a.id][Status.PASSED.value]
        stats.failed_count += outcomes[a.id][Status.FAILED.value]

    return [rows[surah] for surah in sorted(rows, key=_surah_sort_key)]
