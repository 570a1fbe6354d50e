"""Async HTTP client for the FitZone API."""

from typing import Any, Dict, List, Optional

import httpx

from app.client.token_store import TokenStore
from app.utils.logger import get_logger

logger = get_logger(__name__)


class ApiError(Exception):
    """Non-2xx response, unreadable body, or no response at all (``status_code`` 0)."""

    def __init__(self, status_code: int, message: str, body: Optional[Dict[str, Any]] = None):
        self.status_code = status_code
        self.message = message
        self.body = body or {}
        super().__init__(f"{status_code}: {message}")

    @classmethod
    def from_response(cls, response: httpx.Response) -> "ApiError":
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        message = body.get("message") or body.get("reason") or response.reason_phrase
        return cls(response.status_code, message, body)


class BearerTokenAuth(httpx.Auth):
    """Adds the stored token, if any, to every request."""

    def __init__(self, token_store: TokenStore):
        self._token_store = token_store

    def auth_flow(self, request: httpx.Request):
        token = self._token_store.load()
        if token:
            request.headers["Authorization"] = f"Bearer {token}"
        yield request


class FitZoneApiClient:
    """One method per API endpoint. Every failure surfaces as ApiError."""

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            auth=BearerTokenAuth(token_store),
            headers={"Content-Type": "application/json"},
            transport=transport,
            timeout=timeout,
        )

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise ApiError(0, f"Network error: {e}") from e

        if response.is_error:
            error = ApiError.from_response(response)
            logger.debug(f"{method} {url} failed: {error}")
            raise error

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(response.status_code, "Invalid response body") from e

    # Public endpoints
    async def get_plans(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/public/plans")

    async def get_categories(self) -> List[Dict[str, Any]]:
        return await self._request("GET", "/api/public/categories")

    async def create_visit(
        self,
        full_name: str,
        phone: str,
        preferred_date: str,
        preferred_time: str,
        message: Optional[str] = None,
    ) -> Dict[str, Any]:
        payload = {
            "fullName": full_name,
            "phone": phone,
            "preferredDate": preferred_date,
            "preferredTime": preferred_time,
        }
        if message:
            payload["message"] = message
        return await self._request("POST", "/api/visits", json=payload)

    # Contract code
    async def validate_contract_code(self, contract_code: str) -> Dict[str, Any]:
        return await self._request(
            "POST", "/api/contract-codes/validate", json={"contractCode": contract_code}
        )

    # Auth endpoints
    async def signup(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/api/auth/signup", json=data)

    async def login(self, email: str, password: str) -> Dict[str, Any]:
        return await self._request("POST", "/api/auth/login", json={"email": email, "password": password})

    async def get_me(self) -> Dict[str, Any]:
        return await self._request("GET", "/api/auth/me")

    # Member endpoints
    async def get_schedule(self, day_of_week: str = "", category: str = "") -> List[Dict[str, Any]]:
        params = {}
        if day_of_week:
            params["dayOfWeek"] = day_of_week
        if category:
            params["category"] = category
        return await self._request("GET", "/api/member/schedule", params=params)

    async def aclose(self) -> None:
        await self._client.aclose()
