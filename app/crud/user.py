"""
User CRUD Operations
Member profiles and subscriptions, both keyed by identity UID.
"""

from typing import Any, Dict, Optional

from app.crud.base import BaseCRUD


class UserCRUD(BaseCRUD):
    """CRUD operations for member profile documents."""

    @property
    def collection_name(self) -> str:
        return "users"

    async def get_profile(self, uid: str) -> Optional[Dict[str, Any]]:
        """
        Get a member profile.

        Args:
            uid: User ID

        Returns:
            Profile data with ``id`` or None if not found
        """
        return await self.get_by_id(uid)


class SubscriptionCRUD(BaseCRUD):
    """CRUD operations for subscription documents."""

    @property
    def collection_name(self) -> str:
        return "subscriptions"

    async def get_subscription(self, uid: str) -> Optional[Dict[str, Any]]:
        """
        Get the subscription belonging to a user.

        Args:
            uid: User ID

        Returns:
            Subscription data with ``id`` or None if the user has none
        """
        return await self.get_by_id(uid)
