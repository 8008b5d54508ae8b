"""Base schema classes for wire models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CustomBase(BaseModel):
    """Base model with common configuration for all wire schemas.

    Fields serialize to camelCase (``fieldName``, ``hasNextPage``) and
    accept either camelCase or snake_case on input.

    Example:
        class SortParam(CustomBase):
            field_name: str

        SortParam.model_validate({"fieldName": "name"})
        SortParam(field_name="name").model_dump(by_alias=True)  # {"fieldName": "name"}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        # Populate models by field name as well as alias
        populate_by_name=True,
        # Allow creation from arbitrary objects with matching attributes
        from_attributes=True,
        # Ignore extra fields for security (silently drop unexpected data)
        extra="ignore",
    )
