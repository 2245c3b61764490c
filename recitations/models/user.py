from datetime import date, datetime
from typing import Any

from bson import ObjectId

COLLECTION = "users"

# never copied into the report
PRIVATE_FIELDS = ("password", "salt", "hash", "tokens")


def to_jsonable(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, dict):
        return {str(k): to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    return value


def public_profile(doc: dict) -> dict:
    return to_jsonable({k: v for k, v in doc.items() if k not in PRIVATE_FIELDS})
