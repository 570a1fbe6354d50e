"""
Client-side session state.

Holds the bearer token and the member projection returned by
``/api/auth/me``, and decides where navigation should land.
"""

from enum import Enum
from typing import Any, Dict, Optional

from app.client.api_client import ApiError, FitZoneApiClient
from app.client.token_store import TokenStore
from app.utils.logger import get_logger

logger = get_logger(__name__)

PROTECTED_ROUTES = ("/member",)
GUEST_ONLY_ROUTES = ("/login", "/signup")
LOGIN_ROUTE = "/login"
HOME_ROUTE = "/member"


class SessionState(str, Enum):
    UNINITIALIZED = "UNINITIALIZED"
    LOADING = "LOADING"
    AUTHENTICATED = "AUTHENTICATED"
    ANONYMOUS = "ANONYMOUS"


class SessionGate:
    """Token plus cached user/subscription/plan, refreshed from the API.

    ``user``, ``subscription`` and ``plan`` are a read-only projection of
    server state; the server stays authoritative.
    """

    def __init__(self, api: FitZoneApiClient, token_store: TokenStore):
        self._api = api
        self._token_store = token_store
        self.state = SessionState.UNINITIALIZED
        self.user: Optional[Dict[str, Any]] = None
        self.subscription: Optional[Dict[str, Any]] = None
        self.plan: Optional[Dict[str, Any]] = None

    @property
    def token(self) -> Optional[str]:
        return self._token_store.load()

    @property
    def is_loading(self) -> bool:
        return self.state in (SessionState.UNINITIALIZED, SessionState.LOADING)

    @property
    def is_authenticated(self) -> bool:
        # A token alone does not count until the member record is loaded
        return bool(self.token) and self.user is not None

    async def load(self) -> SessionState:
        """Refresh the member projection from the cached token."""
        if not self.token:
            self._reset()
            return self.state

        self.state = SessionState.LOADING
        try:
            me = await self._api.get_me()
        except ApiError as e:
            logger.info(f"Session refresh failed ({e.status_code}: {e.message}), signing out")
            self.logout()
            return self.state

        if not isinstance(me, dict) or me.get("user") is None:
            logger.info("Session refresh returned no member, signing out")
            self.logout()
            return self.state

        self.user = me["user"]
        self.subscription = me.get("subscription")
        self.plan = me.get("plan")
        self.state = SessionState.AUTHENTICATED
        return self.state

    async def login(self, token: str) -> SessionState:
        """Persist a freshly issued token and load the member."""
        self._token_store.save(token)
        return await self.load()

    def logout(self) -> None:
        """Forget the token and all cached state. No network call."""
        self._token_store.clear()
        self._reset()

    def _reset(self) -> None:
        self.user = None
        self.subscription = None
        self.plan = None
        self.state = SessionState.ANONYMOUS

    def resolve_route(self, path: str) -> Optional[str]:
        """
        Decide where a navigation to ``path`` should land.

        Returns:
            The path to render, or None while the session is still loading
            and ``path`` needs an answer about authentication.
        """
        if path.startswith(PROTECTED_ROUTES):
            if self.is_loading:
                return None
            return path if self.is_authenticated else LOGIN_ROUTE

        if path in GUEST_ONLY_ROUTES and self.is_authenticated:
            return HOME_ROUTE

        return path
