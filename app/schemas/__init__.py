"""
FitZone Schemas
Pydantic request/response schemas for API validation and documentation.
"""

from app.schemas.user_schema import (
    SignUpRequest,
    LoginRequest,
    TokenResponse,
    MeResponse,
)
from app.schemas.contract_code_schema import (
    ValidateCodeRequest,
    ValidateCodeResponse,
)
from app.schemas.visit_schema import CreateVisitRequest
from app.schemas.responses import (
    OkResponse,
    ErrorDetail,
    ErrorResponse,
)

__all__ = [
    "SignUpRequest",
    "LoginRequest",
    "TokenResponse",
    "MeResponse",
    "ValidateCodeRequest",
    "ValidateCodeResponse",
    "CreateVisitRequest",
    "OkResponse",
    "ErrorDetail",
    "ErrorResponse",
]
