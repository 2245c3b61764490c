from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Report rows are written with camelCase keys."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
