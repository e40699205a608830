"""Shared Pydantic configuration for the knowledge API DTOs.

JSON payloads use camelCase (``categoryId``); snake_case field names are
accepted on input as well.
"""

from typing import Any, ClassVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base DTO with camelCase aliases."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }


class PartialUpdate(CamelModel):
    """Base for update DTOs where every field is optional.

    ``changes()`` returns only the fields the client sent. An explicit
    ``null`` is kept for fields listed in ``nullable_fields`` and dropped for
    the others, so required attributes can never be cleared.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset()

    def changes(self) -> dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {
            name: value
            for name, value in data.items()
            if value is not None or name in self.nullable_fields
        }
