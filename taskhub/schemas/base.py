"""
Base Pydantic schemas with common settings.

The dashboard speaks camelCase JSON (assignedTo, dueDate); schemas accept
either camelCase or snake_case on input and emit camelCase.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema for wire payloads."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class EntityRead(CamelModel):
    """
    Base schema for reading persisted rows.

    Includes the auto-generated id and timestamps.
    """

    id: int
    created_at: datetime
    updated_at: datetime
