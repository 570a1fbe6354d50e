"""
FitZone Models
Firestore document representations and data models.
"""

from app.models.contract_code import ContractCode, ContractCodeStatus, check_redeemable, normalize_code
from app.models.user import UserProfile
from app.models.subscription import Subscription, SubscriptionStatus
from app.models.catalog import (
    Plan,
    Category,
    Coach,
    ScheduleSession,
    VisitRequest,
    DEFAULT_PLANS,
    DEFAULT_CATEGORIES,
    DEFAULT_SCHEDULE,
)

__all__ = [
    "ContractCode",
    "ContractCodeStatus",
    "check_redeemable",
    "normalize_code",
    "UserProfile",
    "Subscription",
    "SubscriptionStatus",
    "Plan",
    "Category",
    "Coach",
    "ScheduleSession",
    "VisitRequest",
    "DEFAULT_PLANS",
    "DEFAULT_CATEGORIES",
    "DEFAULT_SCHEDULE",
]
