from recitations.schemas.base import CamelModel


class StatusCount(CamelModel):
    status: str  # "passed" | "failed" | "neither"
    count: int


class StatusGenderCount(CamelModel):
    status: str
    gender: str  # "male" | "female" | "unknown"
    count: int
