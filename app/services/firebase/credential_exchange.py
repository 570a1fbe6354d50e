"""Password sign-in against the Identity Toolkit REST API."""

from typing import Optional

import httpx

from app.config import Settings
from app.utils.exceptions import AuthServiceError
from app.utils.logger import get_logger

logger = get_logger(__name__)

# The emulator accepts any key but still requires one
EMULATOR_API_KEY = "fake-api-key"
SIGN_IN_PATH = "/v1/accounts:signInWithPassword"


class CredentialExchangeAdapter:
    """Exchanges an email/password pair for a Firebase ID token."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com",
        emulator_host: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if emulator_host:
            self.base_url = f"http://{emulator_host}/identitytoolkit.googleapis.com"
            self.api_key = EMULATOR_API_KEY
        else:
            self.base_url = base_url.rstrip("/")
            self.api_key = api_key
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "CredentialExchangeAdapter":
        return cls(
            api_key=settings.web_api_key,
            base_url=settings.identity_toolkit_url,
            emulator_host=settings.auth_emulator_host or None,
            timeout=settings.identity_timeout_seconds,
            **kwargs,
        )

    async def exchange(self, email: str, password: str) -> str:
        """
        Sign in with email and password.

        Args:
            email: Account email
            password: Account password

        Returns:
            Bearer ID token

        Raises:
            AuthServiceError: On missing API key, transport failure, non-2xx
                              response or a response without a token
        """
        if not self.api_key:
            raise AuthServiceError("Missing Firebase web API key")

        url = f"{self.base_url}{SIGN_IN_PATH}"
        try:
            response = await self._client.post(
                url,
                params={"key": self.api_key},
                json={"email": email, "password": password, "returnSecureToken": True},
            )
        except httpx.HTTPError as e:
            logger.error(f"Identity service unreachable: {e}")
            raise AuthServiceError(f"Identity service unreachable: {e}") from e

        if response.is_error:
            upstream_message = _error_message(response)
            logger.info(
                f"Sign-in rejected: {response.status_code} {upstream_message}",
                extra={"extra_data": {"email": email}},
            )
            raise AuthServiceError(
                message=upstream_message or "Sign-in failed",
                upstream_status=response.status_code,
                upstream_message=upstream_message,
            )

        id_token = _json_body(response).get("idToken")
        if not id_token:
            raise AuthServiceError("Identity service returned no token", upstream_status=response.status_code)
        return id_token

    async def aclose(self) -> None:
        await self._client.aclose()


def _json_body(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _error_message(response: httpx.Response) -> Optional[str]:
    """Extract ``error.message`` from an Identity Toolkit error body."""
    error = _json_body(response).get("error")
    if isinstance(error, dict):
        return error.get("message")
    return None
