"""Contract code validation endpoint."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.dependencies import get_contract_code_validator
from app.models.contract_code import normalize_code
from app.schemas.contract_code_schema import ValidateCodeRequest, ValidateCodeResponse
from app.services.membership.contract_codes import ContractCodeValidator
from app.utils.exceptions import ContractCodeError

router = APIRouter()


@router.post(
    "/validate",
    response_model=ValidateCodeResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ValidateCodeResponse}},
)
async def validate_contract_code(
    request: ValidateCodeRequest,
    validator: ContractCodeValidator = Depends(get_contract_code_validator),
):
    """
    Check whether a contract code can be redeemed.

    An unusable code is not an error here: the response carries
    ``valid: false`` and the reason.
    """
    if not normalize_code(request.contract_code or ""):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"valid": False, "reason": "Contract code is required"},
        )

    try:
        await validator.validate(request.contract_code)
    except ContractCodeError as e:
        return ValidateCodeResponse(valid=False, reason=e.reason)

    return ValidateCodeResponse(valid=True)
