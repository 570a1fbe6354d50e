"""
User Model
Member profile stored in Firestore, keyed by the identity UID.
"""

from datetime import datetime, timezone
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Member profile written once at signup."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", description="Unique user ID (from Firebase Auth)")
    email: str = Field(description="Sign-in email")
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    date_of_birth: str = Field(alias="dateOfBirth", description="Date of birth as entered (YYYY-MM-DD)")
    training_frequency: str = Field(alias="trainingFrequency", description="e.g. 3-4/week")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
        description="Account creation timestamp",
    )

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary for Firestore storage."""
        return self.model_dump(by_alias=True)
