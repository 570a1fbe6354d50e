"""
Standard API Response Wrappers
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class OkResponse(BaseModel):
    """Acknowledgement body."""

    ok: bool = True


class ErrorDetail(BaseModel):
    code: str = Field(description="Error code")
    message: str = Field(description="Error message")
    details: Dict[str, Any] = Field(default_factory=dict, description="Additional error details")


class ErrorResponse(BaseModel):
    """Error body produced for every failed request."""

    success: bool = False
    message: str = Field(description="Message suitable for display")
    error: Optional[ErrorDetail] = None
