"""Contract code validation shared by the validate endpoint and signup."""

from datetime import datetime
from typing import Optional

from app.crud.contract_code import ContractCodeCRUD
from app.models.contract_code import ContractCode, check_redeemable, normalize_code
from app.utils.exceptions import ValidationError
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ContractCodeValidator:
    """Looks up a contract code and checks that it can be redeemed."""

    def __init__(self, codes: ContractCodeCRUD):
        self._codes = codes

    async def validate(self, raw_code: str, now: Optional[datetime] = None) -> ContractCode:
        """
        Validate a contract code as typed by the user.

        Args:
            raw_code: Code with arbitrary case and surrounding whitespace
            now: Reference time for the expiry check

        Returns:
            The redeemable contract code, including its plan

        Raises:
            ValidationError: Code is empty after trimming
            ContractCodeNotFoundError, ContractCodeInactiveError,
            ContractCodeExpiredError
        """
        code = normalize_code(raw_code or "")
        if not code:
            raise ValidationError("Contract code is required")
        contract = check_redeemable(code, await self._codes.get_raw(code), now)
        logger.debug(f"Contract code {code} is redeemable (plan: {contract.plan_id})")
        return contract
