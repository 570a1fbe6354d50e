"""Main API router that aggregates all sub-routers."""

from fastapi import APIRouter

from app.schemas.responses import ErrorResponse

from .auth import router as auth_router
from .contract_codes import router as contract_codes_router
from .health import router as health_router
from .member import router as member_router
from .public import router as public_router
from .visits import router as visits_router

router = APIRouter(
    prefix="/api",
    responses={code: {"model": ErrorResponse} for code in (400, 401, 403, 409, 500)},
)

router.include_router(public_router, prefix="/public", tags=["Public"])
router.include_router(visits_router, prefix="/visits", tags=["Visits"])
router.include_router(contract_codes_router, prefix="/contract-codes", tags=["Contract Codes"])
router.include_router(auth_router, prefix="/auth", tags=["Auth"])
router.include_router(member_router, prefix="/member", tags=["Member"])
router.include_router(health_router, tags=["Health"])

__all__ = ["router"]
