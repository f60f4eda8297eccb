from pydantic import BaseModel
from typing import Any, Optional, Generic, TypeVar

T = TypeVar('T')


class Envelope(BaseModel, Generic[T]):
    status: str
    data: Optional[T] = None
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    """Body of every error reply"""
    status: str = "error"
    data: Optional[Any] = None
    error: str
    error_code: str
    details: Optional[dict] = None
    request_id: str


def envelope(data=None, error: Optional[str] = None, status: str = "ok") -> dict:
    return {"status": status, "data": data, "error": error}
