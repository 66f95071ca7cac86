"""Shared API envelopes. Successful responses wrap their payload in {"data": ...}."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class DataResponse(BaseModel, Generic[T]):
    """Success envelope consumed by the UI."""

    data: T


class ErrorResponse(BaseModel):
    """Error body produced by the exception handlers."""

    error: str
    message: str
    details: dict[str, Any] | None = None


def reject_null(value: Any, field_name: str | None) -> Any:
    """Partial updates may omit a field but not set a NOT NULL column to null."""
    if value is None:
        raise ValueError(f"{field_name} cannot be null")
    return value
