"""
Auth Request/Response Schemas
API schemas for signup, login and the current member.

Request fields are optional at the schema level so that missing values are
reported as "Missing required fields" by the handlers instead of a schema
error.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.services.membership.signup import SignupForm


class SignUpRequest(BaseModel):
    """Member signup request."""

    model_config = ConfigDict(populate_by_name=True)

    contract_code: Optional[str] = Field(default=None, alias="contractCode")
    first_name: Optional[str] = Field(default=None, alias="firstName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    date_of_birth: Optional[str] = Field(default=None, alias="dateOfBirth", description="YYYY-MM-DD")
    training_frequency: Optional[str] = Field(default=None, alias="trainingFrequency", description="e.g. 3-4/week")
    email: Optional[str] = None
    password: Optional[str] = None
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword")

    def to_form(self) -> SignupForm:
        return SignupForm(
            contract_code=self.contract_code or "",
            first_name=self.first_name or "",
            last_name=self.last_name or "",
            date_of_birth=self.date_of_birth or "",
            training_frequency=self.training_frequency or "",
            email=self.email or "",
            password=self.password or "",
            confirm_password=self.confirm_password,
        )


class LoginRequest(BaseModel):
    """Member login request."""

    email: Optional[str] = Field(default=None, description="Sign-in email")
    password: Optional[str] = Field(default=None, description="Password")


class TokenResponse(BaseModel):
    """Token issued after signup or login."""

    token: str = Field(description="Bearer ID token")


class MeResponse(BaseModel):
    """Current member with subscription and plan."""

    user: Dict[str, Any] = Field(description="Profile, or id and email when no profile exists")
    subscription: Optional[Dict[str, Any]] = Field(default=None)
    plan: Optional[Dict[str, Any]] = Field(default=None)
