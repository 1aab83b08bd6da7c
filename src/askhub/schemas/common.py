"""Shared response envelopes."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Body rendered for every domain error."""

    detail: str
    kind: str
    data: dict[str, Any] = Field(default_factory=dict)


class Page(BaseModel, Generic[T]):
    """A slice of a larger ordered collection."""

    items: list[T]
    total: int
    limit: int
    offset: int
