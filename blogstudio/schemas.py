"""Shared Pydantic base for request/response bodies (camelCase on the wire)."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Serialises as camelCase, accepts camelCase or snake_case input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
