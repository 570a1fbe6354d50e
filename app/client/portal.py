"""Member-facing flows built on the API client and the session gate."""

import asyncio
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from app.client.api_client import ApiError, FitZoneApiClient
from app.client.session import SessionGate, SessionState
from app.utils.exceptions import SignupLoginFailedError


class SignupRequiresLogin(Exception):
    """The account exists but the caller has to sign in separately."""

    def __init__(self, email: str):
        self.email = email
        self.notice = "Account created. Please sign in to continue."
        super().__init__(self.notice)


@dataclass
class PortalCatalog:
    plans: List[Dict[str, Any]]
    categories: List[Dict[str, Any]]


class MemberPortal:
    """Signup, sign-in and catalog loading for an interactive client."""

    def __init__(self, api: FitZoneApiClient, session: SessionGate):
        self.api = api
        self.session = session

    async def load_public_catalog(self) -> PortalCatalog:
        """Fetch plans and categories concurrently."""
        plans, categories = await asyncio.gather(self.api.get_plans(), self.api.get_categories())
        return PortalCatalog(plans=plans, categories=categories)

    async def check_contract_code(self, contract_code: str) -> Tuple[bool, str]:
        """Return ``(valid, reason)`` for a code typed by the user."""
        if not contract_code.strip():
            return False, "Please enter a contract code"
        try:
            result = await self.api.validate_contract_code(contract_code)
        except ApiError as e:
            return False, e.body.get("reason") or e.message or "Failed to validate code"
        return bool(result.get("valid")), result.get("reason") or ""

    async def sign_in(self, email: str, password: str) -> SessionState:
        """
        Sign in and load the member.

        The token is stored only once the API accepted the credentials, so a
        401 or 403 leaves no session behind.

        Raises:
            ApiError: Credentials rejected (401) or subscription inactive (403)
        """
        response = await self.api.login(email, password)
        return await self.session.login(response["token"])

    async def register(self, form: Dict[str, Any]) -> SessionState:
        """
        Sign up with a contract code and start a session.

        Raises:
            SignupRequiresLogin: The account was created but no token issued
            ApiError: Any other signup failure
        """
        try:
            response = await self.api.signup(form)
        except ApiError as e:
            if e.message == SignupLoginFailedError.MESSAGE:
                raise SignupRequiresLogin(form.get("email", "")) from e
            raise
        return await self.session.login(response["token"])
