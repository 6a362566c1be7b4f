from __future__ import annotations

from datetime import datetime
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

DataT = TypeVar("DataT")


class Timestamps(BaseModel):
    """Common created/updated timestamp fields."""
    created_at: datetime = Field(..., description="Creation timestamp (UTC)")
    updated_at: datetime = Field(..., description="Last update timestamp (UTC)")


class IDModel(BaseModel):
    """Base schema exposing the integer primary key."""
    id: int = Field(..., description="Unique identifier")


# PUBLIC_INTERFACE
class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every response body, successful or not."""
    success: bool = Field(..., description="True when the request was fulfilled")
    message: str = Field(default="", description="Human readable message")
    data: Optional[DataT] = Field(default=None, description="Payload, if any")
    errors: List[str] = Field(default_factory=list, description="Error details")

    @classmethod
    def ok(cls, data: Optional[DataT] = None, message: str = "Success") -> "ApiResponse[DataT]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, errors: Optional[List[str]] = None) -> "ApiResponse[DataT]":
        return cls(success=False, message=message, errors=errors or [])


class HealthStatus(BaseModel):
    """Health probe payload."""
    status: str = Field(..., description="'ok' when the service is up")
    storage_backend: str = Field(..., description="Configured persistence strategy")
    timestamp: datetime = Field(..., description="Server time (UTC)")
