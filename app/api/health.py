"""Liveness endpoint."""

from fastapi import APIRouter

from app.schemas.responses import OkResponse

router = APIRouter()


@router.get("/health", response_model=OkResponse, summary="Health check endpoint")
async def health_check() -> OkResponse:
    return OkResponse(ok=True)
