"""
Shared DTO base.

The HTTP contract uses camelCase keys while the Python side uses
snake_case attributes; every DTO accepts either on input and dumps
camelCase through ``to_api()``.
"""

from typing import Any, Dict

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases"""

    class Config:
        """Pydantic configuration."""
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

    def to_api(self, **kwargs: Any) -> Dict[str, Any]:
        """Dump as JSON-compatible data with camelCase keys"""
        return self.model_dump(mode="json", by_alias=True, **kwargs)
