"""Shared base model for storefront API payloads.

The storefront API speaks camelCase JSON; the Python side uses snake_case
attribute names and converts at the boundary.
"""

from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base model with camelCase aliases, accepting either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict:
        """Serialize for a request body, using the API's camelCase names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class PaginatedResult(ApiModel, Generic[T]):
    items: List[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
