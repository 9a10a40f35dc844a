"""Standard response envelope shared by every endpoint."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    """``{status, data, message}`` wrapper for success and failure responses."""

    status: bool
    data: T | None = None
    message: str


def envelope(status: bool, data: Any, message: str) -> dict[str, Any]:
    """Build a JSON-ready envelope for responses produced outside a route."""
    return {"status": status, "data": data, "message": message}
