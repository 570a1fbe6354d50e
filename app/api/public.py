"""Public catalog endpoints: plans and class categories."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from app.crud.catalog import CategoryCRUD, PlanCRUD
from app.dependencies import get_category_crud, get_plan_crud

router = APIRouter()


@router.get("/plans", response_model=List[Dict[str, Any]])
async def list_plans(plans: PlanCRUD = Depends(get_plan_crud)) -> List[Dict[str, Any]]:
    """List membership plans, or the default plans when none are stored."""
    return await plans.list_plans()


@router.get("/categories", response_model=List[Dict[str, Any]])
async def list_categories(categories: CategoryCRUD = Depends(get_category_crud)) -> List[Dict[str, Any]]:
    """List class categories, or the default categories when none are stored."""
    return await categories.list_categories()
