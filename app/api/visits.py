"""Visit request intake."""

from fastapi import APIRouter, Depends, status

from app.crud.visit import VisitCRUD
from app.dependencies import get_visit_crud
from app.models.catalog import VisitRequest
from app.schemas.responses import OkResponse
from app.schemas.visit_schema import CreateVisitRequest
from app.utils.exceptions import ValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.post("", response_model=OkResponse, status_code=status.HTTP_201_CREATED)
async def create_visit(
    request: CreateVisitRequest,
    visits: VisitCRUD = Depends(get_visit_crud),
) -> OkResponse:
    """
    Record a request to visit the gym.

    Raises:
        ValidationError: If name, phone, date or time is missing
    """
    if not (request.full_name and request.phone and request.preferred_date and request.preferred_time):
        raise ValidationError("Missing required fields")

    visit_id = await visits.create_visit(
        VisitRequest(
            full_name=request.full_name,
            phone=request.phone,
            preferred_date=request.preferred_date,
            preferred_time=request.preferred_time,
            message=request.message or "",
        )
    )
    logger.info(f"Visit request recorded: {visit_id}")
    return OkResponse(ok=True)
