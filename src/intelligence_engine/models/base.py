"""
Shared pydantic base for engine models.

Python attributes are snake_case; the wire shape (callers' JSON and the
completion service's JSON) is camelCase, so every model accepts both and
dumps camelCase with by_alias=True.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class EngineModel(BaseModel):
    """Base model accepting snake_case names and camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


def none_to_empty(value, default):
    """Treat an explicit None as the empty default (used by before-validators)."""
    return default if value is None else value
