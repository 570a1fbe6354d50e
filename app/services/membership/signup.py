"""Member signup: contract code redemption plus account creation."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from app.crud.redemption import RedemptionCRUD
from app.models.contract_code import normalize_code
from app.models.user import UserProfile
from app.services.identity import CredentialExchange, IdentityService
from app.services.membership.contract_codes import ContractCodeValidator
from app.utils.exceptions import (
    AuthServiceError,
    ContractCodeError,
    EmailAlreadyRegisteredError,
    EmailInUseError,
    IdentityError,
    PasswordMismatchError,
    SignupLoginFailedError,
    UserCreationError,
    ValidationError,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SignupForm:
    contract_code: str
    first_name: str
    last_name: str
    date_of_birth: str
    training_frequency: str
    email: str
    password: str
    confirm_password: Optional[str] = None

    def check(self) -> None:
        """Raise before any I/O if required fields are empty or passwords differ."""
        required = (
            normalize_code(self.contract_code),
            self.first_name,
            self.last_name,
            self.date_of_birth,
            self.training_frequency,
            self.email,
            self.password,
        )
        if not all(required):
            raise ValidationError("Missing required fields")
        if self.confirm_password and self.confirm_password != self.password:
            raise PasswordMismatchError()


class SignupOrchestrator:
    """Validates a contract code, creates the member and signs them in."""

    def __init__(
        self,
        validator: ContractCodeValidator,
        redemption: RedemptionCRUD,
        identity: IdentityService,
        credentials: CredentialExchange,
    ):
        self._validator = validator
        self._redemption = redemption
        self._identity = identity
        self._credentials = credentials

    async def signup(self, form: SignupForm, now: Optional[datetime] = None) -> str:
        """
        Run the signup flow.

        Args:
            form: Signup form fields
            now: Signup time, start of the subscription window

        Returns:
            Bearer token for the new member

        Raises:
            ValidationError: Missing fields or password mismatch
            ContractCodeError: Code unknown, not active or expired
            EmailInUseError: Email already registered
            UserCreationError: Identity service failed to create the account
            SignupLoginFailedError: Account committed, sign-in failed
        """
        form.check()
        code = normalize_code(form.contract_code)

        await self._validator.validate(code, now)

        try:
            uid = await self._identity.create_user(
                email=form.email,
                password=form.password,
                display_name=f"{form.first_name} {form.last_name}",
            )
        except EmailAlreadyRegisteredError as e:
            raise EmailInUseError(form.email) from e
        except IdentityError as e:
            raise UserCreationError() from e

        now = now or datetime.now(timezone.utc)
        profile = UserProfile(
            user_id=uid,
            email=form.email,
            first_name=form.first_name,
            last_name=form.last_name,
            date_of_birth=form.date_of_birth,
            training_frequency=form.training_frequency,
            created_at=now,
        )

        try:
            subscription = await self._redemption.redeem(code, profile, now)
        except ContractCodeError as e:
            logger.warning(
                f"Contract code {code} was redeemed concurrently, removing account {uid}",
                extra={"extra_data": {"reason": e.reason}},
            )
            await self._discard_identity(uid)
            raise
        except Exception:
            await self._discard_identity(uid)
            raise

        logger.info(
            f"Member signed up: {uid}",
            extra={"extra_data": {"contract_code": code, "plan_id": subscription.plan_id}},
        )

        # The membership is committed; a failed sign-in must not undo it
        try:
            return await self._credentials.exchange(form.email, form.password)
        except AuthServiceError as e:
            logger.error(f"Sign-in after signup failed for {uid}: {e.message}")
            raise SignupLoginFailedError(form.email) from e

    async def _discard_identity(self, uid: str) -> None:
        try:
            await self._identity.delete_user(uid)
        except IdentityError as e:
            logger.error(f"Failed to remove orphaned account {uid}: {e.message}")
