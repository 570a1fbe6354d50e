"""
Contract Code Model
Single-use vouchers that tie a prospective member to a plan.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.exceptions import (
    ContractCodeExpiredError,
    ContractCodeInactiveError,
    ContractCodeNotFoundError,
)


class ContractCodeStatus(str, Enum):
    """Known contract code states. Stores may hold other values."""
    ACTIVE = "ACTIVE"
    USED = "USED"


def normalize_code(code: str) -> str:
    """Normalize a raw contract code to its document identifier."""
    return code.strip().upper()


def _to_datetime(value: Any) -> Optional[datetime]:
    """Coerce Firestore timestamps and ISO strings to aware datetimes."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, str):
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    raise ValueError(f"Unsupported timestamp value: {value!r}")


class ContractCode(BaseModel):
    """Contract code document stored in the ``contractCodes`` collection."""

    model_config = ConfigDict(populate_by_name=True)

    code: str = Field(description="Normalized code, also the document ID")
    status: Optional[str] = Field(default=None, description="ACTIVE, USED or any externally set state")
    plan_id: Optional[str] = Field(default=None, alias="planId", description="Plan granted by the code")
    expires_at: Optional[datetime] = Field(default=None, alias="expiresAt", description="Expiry timestamp")
    used_by: Optional[str] = Field(default=None, alias="usedBy", description="UID of the redeemer")
    used_at: Optional[datetime] = Field(default=None, alias="usedAt", description="Redemption timestamp")

    @field_validator("expires_at", "used_at", mode="before")
    @classmethod
    def coerce_timestamp(cls, v: Any) -> Optional[datetime]:
        return _to_datetime(v)

    @property
    def is_active(self) -> bool:
        return self.status == ContractCodeStatus.ACTIVE.value

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        """Whether the code has an expiry that lies before ``now``."""
        if self.expires_at is None:
            return False
        return self.expires_at < (now or datetime.now(timezone.utc))

    @classmethod
    def from_dict(cls, code: str, data: Dict[str, Any]) -> "ContractCode":
        """Create a contract code from a Firestore document."""
        fields = {k: v for k, v in data.items() if k not in ("id", "code")}
        return cls(code=code, **fields)


def check_redeemable(code: str, data: Optional[Dict[str, Any]], now: Optional[datetime] = None) -> ContractCode:
    """Apply the redemption rules to a stored contract code document.

    Args:
        code: Normalized code
        data: Stored document, or None if it does not exist
        now: Reference time for the expiry check

    Returns:
        The parsed contract code

    Raises:
        ContractCodeNotFoundError: No document
        ContractCodeInactiveError: Status is not ACTIVE
        ContractCodeExpiredError: Expiry lies in the past
    """
    if data is None:
        raise ContractCodeNotFoundError(code)

    contract = ContractCode.from_dict(code, data)
    if not contract.is_active:
        raise ContractCodeInactiveError(code)
    if contract.is_expired(now):
        raise ContractCodeExpiredError(code)
    return contract
