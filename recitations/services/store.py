from typing import Any, Iterable, Optional

from pymongo.database import Database

from recitations.models import assignment as assignment_model
from recitations.models import submission as submission_model
from recitations.models import user as user_model
from recitations.models.assignment import Assignment
from recitations.models.submission import GRADED_STATUSES, AssignmentPassData
from recitations.services.window import TimeWindow

# present and not null
PRESENT = {"$exists": True, "$ne": None}


class RecitationStore:
    """Read-only queries over the assignment collections."""

    def __init__(self, db: Database):
        self.assignments = db[assignment_model.COLLECTION]
        self.submissions = db[submission_model.COLLECTION]
        self.users = db[user_model.COLLECTION]

    # --- assignments ---

    def count_recitations(
        self,
        window: TimeWindow,
        gender: Optional[str] = None,
        graded: Optional[bool] = None,
    ) -> int:
        query: dict[str, Any] = {
            "courseGenderForQuran": gender if gender is not None else PRESENT,
            "creationDate": window.mongo_range(),
        }
        if graded is not None:
            query["isGraded"] = graded
        return self.assignments.count_documents(query)

    def recitations_in_window(self, window: TimeWindow) -> list[Assignment]:
        cursor = self.assignments.find(
            {
                "courseGenderForQuran": PRESENT,
                "creationDate": window.mongo_range(),
            }
        )
        return [Assignment.model_validate(doc) for doc in cursor]

    def assignments_by_id(self, ids: Iterable[Any]) -> dict[Any, Assignment]:
        ids = list({i for i in ids if i is not None})
        if not ids:
            return {}
        cursor = self.assignments.find({"_id": {"$in": ids}})
        return {doc["_id"]: Assignment.model_validate(doc) for doc in cursor}

    # --- submissions ---

    def submissions_in_window(self, window: TimeWindow) -> list[AssignmentPassData]:
        cursor = self.submissions.find({"createdAt": window.mongo_range()})
        return [AssignmentPassData.model_validate(doc) for doc in cursor]

    def graded_submissions_in_window(
        self, window: TimeWindow
    ) -> list[AssignmentPassData]:
        cursor = self.submissions.find(
            {
                "teacher": PRESENT,
                "status": {"$in": list(GRADED_STATUSES)},
                "createdAt": window.mongo_range(),
            }
        )
        return [AssignmentPassData.model_validate(doc) for doc in cursor]

    def submissions_for_assignments(
        self, assignment_ids: Iterable[Any], window: Optional[TimeWindow] = None
    ) -> list[AssignmentPassData]:
        ids = list(assignment_ids)
        if not ids:
            return []
        query: dict[str, Any] = {"assignment": {"$in": ids}}
        if window is not None:
            query["createdAt"] = window.mongo_range()
        return [
            AssignmentPassData.model_validate(doc)
            for doc in self.submissions.find(query)
        ]

    def students_with_submissions_before(
        self, student_ids: Iterable[Any], window: TimeWindow
    ) -> set:
        ids = list(student_ids)
        if not ids:
            return set()
        return set(
            self.submissions.distinct(
                "student",
                {"student": {"$in": ids}, "createdAt": {"$lt": window.naive_start}},
            )
        )

    # --- users ---

    def users_by_id(self, ids: Iterable[Any]) -> dict[Any, dict]:
        ids = list({i for i in ids if i is not None})
        if not ids:
            return {}
        return {doc["_id"]: doc for doc in self.users.find({"_id": {"$in": ids}})}
