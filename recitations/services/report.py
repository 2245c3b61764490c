import logging
from concurrent.futures import ThreadPoolExecutor

from recitations.core.timing import log_duration
from recitations.models.assignment import Gender
from recitations.schemas.report import DailyReport, RecitationCounts
from recitations.services import metrics
from recitations.services.store import RecitationStore
from recitations.services.window import TimeWindow

logger = logging.getLogger(__name__)


def recitation_counts(store: RecitationStore, window: TimeWindow) -> RecitationCounts:
    male, female = Gender.MALE.value, Gender.FEMALE.value
    return RecitationCounts(
        total=store.count_recitations(window),
        male=store.count_recitations(window, gender=male),
        female=store.count_recitations(window, gender=female),
        male_graded=store.count_recitations(window, gender=male, graded=True),
        female_graded=store.count_recitations(window, gender=female, graded=True),
    )


def graded_by_teacher(store: RecitationStore, window: TimeWindow):
    submissions = store.graded_submissions_in_window(window)
    teachers = store.users_by_id(s.teacher for s in submissions)
    return metrics.graded_by_teacher(submissions, teachers)


def daily_users(store: RecitationStore, window: TimeWindow):
    # 1) recitations in the window and their in-window submissions
    recitations = store.recitations_in_window(window)
    submissions = store.submissions_for_assignments(
        [a.id for a in recitations], window=window
    )

    # 2) one entry per student: earliest submission + gender
    first = metrics.first_submissions(recitations, submissions)

    # 3) students seen before the window are "old"
    returning = store.students_with_submissions_before(first.keys(), window)
    return metrics.daily_users(first, returning)


def multi_submission_students(store: RecitationStore, window: TimeWindow):
    return metrics.multi_submission_students(store.submissions_in_window(window))


def status_breakdown(store: RecitationStore, window: TimeWindow):
    return metrics.status_breakdown(store.submissions_in_window(window))


def status_by_gender(store: RecitationStore, window: TimeWindow):
    submissions = store.submissions_in_window(window)
    assignments = store.assignments_by_id(s.assignment for s in submissions)
    return metrics.status_by_gender(submissions, assignments)


def surah_breakdown(store: RecitationStore, window: TimeWindow):
    recitations = store.recitations_in_window(window)
    submissions = store.submissions_for_assignments([a.id for a in recitations])
    return metrics.surah_breakdown(recitations, submissions)


QUERIES = {
    "recitation_counts": recitation_counts,
    "graded_by_teacher": graded_by_teacher,
    "daily_users": daily_users,
    "multi_submission_students": multi_submission_students,
    "status_breakdown": status_breakdown,
    "status_by_gender": status_by_gender,
    "surah_breakdown": surah_breakdown,
}


def _timed(name, query, store, window):
    with log_duration(name):
        return query(store, window)


def run_queries(store: RecitationStore, window: TimeWindow, max_workers: int = 4) -> dict:
    """Run every report query; the first failure is re-raised."""
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            name: pool.submit(_timed, name, query, store, window)
            for name, query in QUERIES.items()
        }
        return {name: future.result() for name, future in futures.items()}


def assemble_report(results: dict) -> DailyReport:
    counts: RecitationCounts = results["recitation_counts"]

    return DailyReport(
        total_recitations=counts.total,
        total_male_recitations=counts.male,
        total_female_recitations=counts.female,
        male_graded_recitations=counts.male_graded,
        female_graded_recitations=counts.female_graded,
        total_graded_recitations=counts.graded,
        total_ungraded_recitations=counts.ungraded,
        **metrics.recitation_percentages(counts),
        total_recitations_graded_by_teacher=results["graded_by_teacher"],
        total_daily_users=results["daily_users"],
        multi_recitation_students=results["multi_submission_students"],
        assignments_categorized_by_status=results["status_breakdown"],
        assignments_categorized_by_status_and_gender=results["status_by_gender"],
        assignments_categorized_by_surah=results["surah_breakdown"],
    )


def build_report(
    store: RecitationStore, window: TimeWindow, max_workers: int = 4
) -> DailyReport:
    logger.info(
        "Building report for %s: creationDate >= %s and < %s",
        window.report_date.isoformat(),
        window.start.isoformat(),
        window.end.isoformat(),
    )
    return assemble_report(run_queries(store, window, max_workers=max_workers))
