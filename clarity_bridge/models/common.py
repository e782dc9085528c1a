"""
Common model base.

Shared pydantic configuration for every value object produced or consumed by
the core: snake_case attributes in Python, camelCase keys on the wire.

Dependencies: pydantic
System role: Serialization conventions for domain models
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_payload(self) -> dict:
        """Dump to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
