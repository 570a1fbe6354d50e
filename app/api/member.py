"""Member-only endpoints."""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query

from app.crud.catalog import ScheduleCRUD
from app.dependencies import get_current_user, get_schedule_crud

router = APIRouter()


@router.get("/schedule", response_model=List[Dict[str, Any]])
async def get_schedule(
    day_of_week: str = Query("", alias="dayOfWeek", description="Lowercase weekday, e.g. monday"),
    category: str = Query("", description="Category name, e.g. Yoga"),
    current_user: Dict[str, Any] = Depends(get_current_user),
    schedule: ScheduleCRUD = Depends(get_schedule_crud),
) -> List[Dict[str, Any]]:
    """List class sessions matching the optional weekday and category filters."""
    return await schedule.list_sessions(day_of_week=day_of_week, category=category)
