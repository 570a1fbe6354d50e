"""Member login: credential exchange gated on subscription status."""

from app.crud.user import SubscriptionCRUD
from app.models.subscription import SubscriptionStatus
from app.services.identity import CredentialExchange, IdentityService
from app.utils.exceptions import (
    AuthServiceError,
    IdentityError,
    InvalidCredentialsError,
    LoginFailedError,
    SubscriptionInactiveError,
    ValidationError,
)
from app.utils.logger import get_logger

logger = get_logger(__name__)


class LoginOrchestrator:
    """Signs a member in and refuses members whose subscription is inactive."""

    def __init__(
        self,
        credentials: CredentialExchange,
        identity: IdentityService,
        subscriptions: SubscriptionCRUD,
    ):
        self._credentials = credentials
        self._identity = identity
        self._subscriptions = subscriptions

    async def login(self, email: str, password: str) -> str:
        """
        Exchange credentials for a token and check the subscription.

        Returns:
            Bearer token

        Raises:
            ValidationError: Email or password missing
            InvalidCredentialsError: Sign-in rejected (unknown email and wrong
                                     password are not distinguished)
            SubscriptionInactiveError: Subscription exists and is not ACTIVE
            LoginFailedError: Token verification or subscription lookup failed
        """
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            token = await self._credentials.exchange(email, password)
        except AuthServiceError as e:
            logger.info(f"Failed login attempt for: {email}")
            raise InvalidCredentialsError(e.upstream_message or "Invalid credentials") from e

        try:
            decoded = await self._identity.verify_token(token)
            subscription = await self._subscriptions.get_subscription(decoded["uid"])
        except (IdentityError, KeyError) as e:
            logger.error(f"Login check failed for {email}: {e}")
            raise LoginFailedError() from e
        except Exception as e:
            logger.error(f"Login check failed for {email}: {e}", exc_info=True)
            raise LoginFailedError() from e

        if subscription is not None and subscription.get("status") != SubscriptionStatus.ACTIVE.value:
            logger.info(f"Login refused, subscription {subscription.get('status')}: {decoded['uid']}")
            raise SubscriptionInactiveError(status=subscription.get("status"))

        logger.info(f"User logged in: {decoded['uid']}")
        return token
