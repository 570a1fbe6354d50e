"""
Visit Request Schemas
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateVisitRequest(BaseModel):
    """Visit request from the public site."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: Optional[str] = Field(default=None, alias="fullName")
    phone: Optional[str] = None
    preferred_date: Optional[str] = Field(default=None, alias="preferredDate")
    preferred_time: Optional[str] = Field(default=None, alias="preferredTime")
    message: Optional[str] = None
