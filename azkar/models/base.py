"""
Base model configuration
Shared pydantic bases for command bodies and canonical entities
"""

from pydantic import BaseModel as PydanticBaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """Base model for command request bodies.

    This base model configuration:
    - Accepts camelCase ipc arguments for snake_case python fields
    - Forbids unknown fields to ensure type safety
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        # Allow populating by both field name and alias
        populate_by_name=True,
        extra="forbid",
    )

    def model_dump(self, **kwargs):
        """Override model_dump to always use aliases (camelCase) by default."""
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)


class EntityModel(PydanticBaseModel):
    """Base model for data owned by the store.

    Field names travel in snake_case exactly as the store writes them.
    Unknown fields are ignored so newer stores stay readable.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
    )

    def model_dump(self, **kwargs):
        """Dump with wire names (aliases) by default."""
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)
