from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelRequest(BaseModel):
    """Request bodies accept camelCase keys and snake_case alike."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
