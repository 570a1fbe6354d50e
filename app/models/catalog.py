"""
Catalog Models
Read-only reference data: plans, class categories and the weekly schedule.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Plan(BaseModel):
    """Membership plan offered on the public site."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    name: str
    price: float = Field(ge=0)
    billing_period: str = Field(default="month", alias="billingPeriod")
    features: List[str] = Field(default_factory=list)


class Category(BaseModel):
    """Class category (CrossFit, Pool, ...)."""

    model_config = ConfigDict(extra="allow")

    id: str
    name: str


class Coach(BaseModel):
    name: str
    specialties: List[str] = Field(default_factory=list)


class ScheduleSession(BaseModel):
    """One weekly class slot."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str
    title: str
    day_of_week: str = Field(alias="dayOfWeek", description="Lowercase weekday name")
    start_time: str = Field(alias="startTime", description="HH:MM")
    end_time: str = Field(alias="endTime", description="HH:MM")
    category: str
    room: Optional[str] = None
    coach: Optional[Coach] = None

    def matches(self, day_of_week: str = "", category: str = "") -> bool:
        """Equality filter on weekday and category; empty filters match all."""
        if day_of_week and self.day_of_week != day_of_week:
            return False
        if category and self.category != category:
            return False
        return True


class VisitRequest(BaseModel):
    """Visit request left by a prospective member."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(alias="fullName")
    phone: str
    preferred_date: str = Field(alias="preferredDate")
    preferred_time: str = Field(alias="preferredTime")
    message: str = ""
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc), alias="createdAt"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert visit request to dictionary for Firestore storage."""
        return self.model_dump(by_alias=True)


def dump_catalog(items: List[BaseModel]) -> List[Dict[str, Any]]:
    """Serialize catalog entries the way they are stored (camelCase keys)."""
    return [item.model_dump(by_alias=True, exclude_none=True) for item in items]


# Served when the corresponding collection is empty
DEFAULT_PLANS = [
    Plan(
        id="basic",
        name="Basic",
        price=29,
        billing_period="month",
        features=["Gym access", "Locker room", "1 guest pass/month"],
    ),
    Plan(
        id="pro",
        name="Pro Membership",
        price=59,
        billing_period="month",
        features=["All Basic features", "Group classes", "2 guest passes/month"],
    ),
    Plan(
        id="elite",
        name="Elite",
        price=99,
        billing_period="month",
        features=["All Pro features", "Personal training", "Pool access"],
    ),
]

DEFAULT_CATEGORIES = [
    Category(id="crossfit", name="CrossFit"),
    Category(id="pool", name="Pool"),
    Category(id="yoga", name="Yoga"),
    Category(id="hiit", name="HIIT"),
]

DEFAULT_SCHEDULE = [
    ScheduleSession(
        id="s1",
        title="Morning CrossFit",
        day_of_week="monday",
        start_time="06:00",
        end_time="07:00",
        category="CrossFit",
        room="Studio A",
        coach=Coach(name="John Smith", specialties=["CrossFit", "HIIT"]),
    ),
    ScheduleSession(
        id="s2",
        title="Power Yoga",
        day_of_week="tuesday",
        start_time="08:00",
        end_time="09:00",
        category="Yoga",
        room="Studio B",
        coach=Coach(name="Sarah Johnson", specialties=["Yoga", "Meditation"]),
    ),
    ScheduleSession(
        id="s3",
        title="Lap Swimming",
        day_of_week="wednesday",
        start_time="10:00",
        end_time="11:00",
        category="Pool",
        coach=Coach(name="Mike Davis", specialties=["Swimming", "Water Aerobics"]),
    ),
    ScheduleSession(
        id="s4",
        title="Afternoon HIIT",
        day_of_week="thursday",
        start_time="17:00",
        end_time="18:00",
        category="HIIT",
        room="Main Floor",
        coach=Coach(name="Emily Brown", specialties=["HIIT", "Cardio"]),
    ),
]
