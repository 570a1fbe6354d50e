"""
Subscription Models
Membership window and status for a member.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.utils.dates import add_years


class SubscriptionStatus(str, Enum):
    """Subscription status enumeration. Other values may be set externally."""
    ACTIVE = "ACTIVE"


class Subscription(BaseModel):
    """Subscription document, one per member, keyed by the identity UID."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    plan_id: Optional[str] = Field(default=None, alias="planId")
    status: str = Field(default=SubscriptionStatus.ACTIVE.value)
    start_date: str = Field(alias="startDate", description="ISO-8601 start timestamp")
    end_date: str = Field(alias="endDate", description="ISO-8601 end timestamp")

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE.value

    @classmethod
    def starting_at(cls, user_id: str, plan_id: Optional[str], start: datetime) -> "Subscription":
        """Create an active one-year subscription beginning at ``start``."""
        return cls(
            user_id=user_id,
            plan_id=plan_id,
            status=SubscriptionStatus.ACTIVE.value,
            start_date=start.isoformat(),
            end_date=add_years(start, 1).isoformat(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert subscription to dictionary for Firestore storage."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subscription":
        """Create subscription from Firestore dictionary."""
        return cls(**{k: v for k, v in data.items() if k != "id"})
