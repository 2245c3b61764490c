import json
from datetime import timedelta

import pytest
from bson import ObjectId
from pymongo.errors import OperationFailure

from recitations.services.report import build_report
from tests.conftest import BEFORE_WINDOW, IN_WINDOW, WINDOW_END, WINDOW_START


def seed_scenario(add_assignment):
    # 6 male (5 graded), 4 female (2 graded)
    for i in range(6):
        add_assignment(name=str(i + 1), gender="male", graded=i < 5)
    for i in range(4):
        add_assignment(name=str(i + 1), gender="female", graded=i < 2)


def test_recitation_totals_and_percentages(store, window, add_assignment):
    seed_scenario(add_assignment)
    add_assignment(gender=None)  # general assignment, not a recitation

    report = build_report(store, window)

    assert report.total_recitations == 10
    assert report.total_male_recitations == 6
    assert report.total_female_recitations == 4
    assert report.male_recitations_as_percentage == 60
    assert report.female_recitations_as_percentage == 40
    assert report.male_graded_recitations == 5
    assert report.female_graded_recitations == 2
    assert report.total_graded_recitations == 7
    assert report.total_ungraded_recitations == 3
    assert report.ungraded_recitations_as_percentage == 30


def test_window_is_inclusive_start_exclusive_end(store, window, add_assignment):
    add_assignment(created=WINDOW_START)
    add_assignment(created=WINDOW_END - timedelta(seconds=1))
    add_assignment(created=WINDOW_END)
    add_assignment(created=WINDOW_START - timedelta(seconds=1))

    report = build_report(store, window)

    assert report.total_recitations == 2


def test_submissions_outside_window_are_ignored(
    store, window, add_assignment, add_submission
):
    a = add_assignment()
    add_submission("s1", a, "passed", created=IN_WINDOW)
    add_submission("s2", a, "passed", created=WINDOW_END)
    add_submission("s3", a, "failed", created=BEFORE_WINDOW)

    report = build_report(store, window)

    assert [(r.status, r.count) for r in report.assignments_categorized_by_status] == [
        ("passed", 1)
    ]
    assert [
        (r.submission_type, r.count) for r in report.multi_recitation_students
    ] == [("single", 1)]


def test_new_and_old_students(store, window, add_assignment, add_submission):
    old_assignment = add_assignment(created=BEFORE_WINDOW)
    male = add_assignment(gender="male")
    female = add_assignment(gender="female")

    # "old" has a submission before the window, "new" does not
    add_submission("old", old_assignment, created=BEFORE_WINDOW)
    add_submission("old", male)
    add_submission("new", female)
    add_submission("new", female, created=IN_WINDOW + timedelta(hours=1))

    report = build_report(store, window)

    [users] = report.total_daily_users
    assert users.new_students.female == 1
    assert users.new_students.male == 0
    assert users.old_students.male == 1
    assert users.old_students.female == 0
    assert users.total_students == 2

    assert [
        (r.submission_type, r.count) for r in report.multi_recitation_students
    ] == [("single", 1), ("multiple", 1)]


def test_status_by_gender_joins_assignments(
    store, window, add_assignment, add_submission
):
    male = add_assignment(gender="male")
    untagged = add_assignment(gender=None)
    add_submission("a", male, "passed")
    add_submission("b", untagged, "failed")
    add_submission("c", ObjectId(), "initial")

    report = build_report(store, window)

    rows = report.assignments_categorized_by_status_and_gender
    assert [(r.status, r.gender, r.count) for r in rows] == [
        ("passed", "male", 1),
        ("failed", "unknown", 1),
        ("neither", "unknown", 1),
    ]
    assert sum(r.count for r in rows) == 3


def test_graded_by_teacher(store, window, add_assignment, add_submission, add_user):
    teacher = add_user(name="Ustad Ali", password="hash")
    a = add_assignment()
    add_submission("a", a, "passed", teacher=teacher)
    add_submission("b", a, "failed", teacher=teacher)
    add_submission("c", a, "initial", teacher=teacher)  # not graded yet
    add_submission("d", a, "passed")  # no teacher
    add_submission("e", a, "passed", teacher=teacher, created=BEFORE_WINDOW)

    report = build_report(store, window)

    [row] = report.total_recitations_graded_by_teacher
    assert row.count == 2
    assert row.teacher == {"_id": str(teacher), "name": "Ustad Ali"}


def test_surah_breakdown(store, window, add_assignment, add_submission):
    a = add_assignment(name="2", gender="male", graded=True)
    add_assignment(name="2", gender="female", graded=False)
    add_assignment(name="1", gender="female", graded=True)
    add_assignment(name="5", gender="male", created=BEFORE_WINDOW)
    add_submission("s", a, "passed")
    add_submission("t", a, "failed")

    report = build_report(store, window, max_workers=1)

    rows = report.assignments_categorized_by_surah
    assert [r.surah for r in rows] == ["1", "2"]
    assert rows[0].male is None
    assert rows[1].male.passed_count == 1
    assert rows[1].male.failed_count == 1
    assert rows[1].female.ungraded_recitations == 1


def test_empty_database(store, window):
    report = build_report(store, window)

    assert report.total_recitations == 0
    assert report.male_recitations_as_percentage == 0.0
    assert report.female_recitations_as_percentage == 0.0
    assert report.male_recitations_graded_as_percentage == 0.0
    assert report.female_recitations_graded_as_percentage == 0.0
    assert report.ungraded_recitations_as_percentage == 0.0
    assert report.total_recitations_graded_by_teacher == []
    assert report.total_daily_users == []
    assert report.multi_recitation_students == []
    assert report.assignments_categorized_by_status == []
    assert report.assignments_categorized_by_status_and_gender == []
    assert report.assignments_categorized_by_surah == []

    text = report.to_json()
    assert "NaN" not in text
    data = json.loads(text)
    assert list(data)[0] == "totalRecitations"
    assert list(data)[-1] == "assignmentsCategorizedBySurah"
    assert len(data) == 18


def test_json_uses_camel_case_and_drops_missing_gender(
    store, window, add_assignment, add_submission
):
    add_assignment(name="7", gender="male", graded=True)

    data = json.loads(build_report(store, window).to_json())

    assert data["maleRecitationsGradedAsPercentage"] == 100
    [row] = data["assignmentsCategorizedBySurah"]
    assert row == {
        "surah": "7",
        "male": {
            "gender": "male",
            "gradedRecitations": 1,
            "ungradedRecitations": 0,
            "passedCount": 0,
            "failedCount": 0,
        },
    }


def test_query_failure_aborts_report(store, window, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationFailure("pipeline failed")

    monkeypatch.setattr(store, "submissions_in_window", broken)

    with pytest.raises(OperationFailure):
        build_report(store, window)
