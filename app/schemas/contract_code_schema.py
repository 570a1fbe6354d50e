"""
Contract Code Request/Response Schemas
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ValidateCodeRequest(BaseModel):
    """Contract code check before the signup form is shown."""

    model_config = ConfigDict(populate_by_name=True)

    contract_code: Optional[str] = Field(default=None, alias="contractCode")


class ValidateCodeResponse(BaseModel):
    """Whether a code can be redeemed, and why not."""

    valid: bool
    reason: Optional[str] = None
