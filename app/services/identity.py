"""Identity service interfaces shared by Firebase and local implementations."""

from typing import Any, Dict, Optional, Protocol


class IdentityService(Protocol):
    """User management and token verification."""

    async def create_user(self, email: str, password: str, display_name: Optional[str] = None) -> str:
        """Create a user and return its UID.

        Raises:
            EmailAlreadyRegisteredError: if the email is taken.
            IdentityError: on any other failure.
        """
        ...

    async def delete_user(self, uid: str) -> None:
        ...

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Return the decoded claims, including ``uid``.

        Raises:
            TokenVerificationError: if the token is invalid or expired.
        """
        ...


class CredentialExchange(Protocol):
    """Exchanges an email/password pair for a bearer token."""

    async def exchange(self, email: str, password: str) -> str:
        """
        Raises:
            AuthServiceError: on rejection or transport failure.
        """
        ...
