"""
Shared schema building blocks.
All API payloads use camelCase on the wire and accept snake_case on input.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serializing field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str = Field(
        ...,
        description="Human-readable confirmation",
        examples=["Listing has been deleted!"]
    )
