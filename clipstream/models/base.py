"""
Shared model base
camelCase wire format over snake_case attributes
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    """Model serialized with camelCase keys, populated by either spelling"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
