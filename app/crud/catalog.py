"""
Catalog CRUD Operations
Plans, categories and the class schedule, with static fallbacks.
"""

from typing import Any, Dict, List, Optional

from app.crud.base import BaseCRUD
from app.models.catalog import (
    DEFAULT_CATEGORIES,
    DEFAULT_PLANS,
    DEFAULT_SCHEDULE,
    dump_catalog,
)


class PlanCRUD(BaseCRUD):
    """Membership plans."""

    @property
    def collection_name(self) -> str:
        return "plans"

    async def list_plans(self) -> List[Dict[str, Any]]:
        """Stored plans, or the default catalog when none are stored."""
        plans = await self.list()
        return plans or dump_catalog(DEFAULT_PLANS)

    async def get_plan(self, plan_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Get a plan by ID, falling back to the default catalog entry.

        Args:
            plan_id: Plan ID (may be None)

        Returns:
            Plan data with ``id``, or None
        """
        if not plan_id:
            return None
        plan = await self.get_by_id(plan_id)
        if plan is not None:
            return plan
        defaults = [p for p in DEFAULT_PLANS if p.id == plan_id]
        return dump_catalog(defaults)[0] if defaults else None


class CategoryCRUD(BaseCRUD):
    """Class categories."""

    @property
    def collection_name(self) -> str:
        return "categories"

    async def list_categories(self) -> List[Dict[str, Any]]:
        categories = await self.list()
        return categories or dump_catalog(DEFAULT_CATEGORIES)


class ScheduleCRUD(BaseCRUD):
    """Weekly class schedule."""

    @property
    def collection_name(self) -> str:
        return "schedule"

    async def list_sessions(self, day_of_week: str = "", category: str = "") -> List[Dict[str, Any]]:
        """
        List sessions matching both filters; empty filters match everything.

        When the collection holds no sessions, the default schedule is
        filtered instead.
        """
        if await self.is_empty():
            return dump_catalog([s for s in DEFAULT_SCHEDULE if s.matches(day_of_week, category)])

        filters = []
        if day_of_week:
            filters.append(("dayOfWeek", "==", day_of_week))
        if category:
            filters.append(("category", "==", category))
        return await self.list(filters)
