from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses the snake_case field names."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ReporterSummary(CamelModel):
    """The only account fields ever nested inside a record."""
    name: str
    email: str
