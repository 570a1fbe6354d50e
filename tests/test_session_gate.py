"""Client session gate and member portal, driven against the ASGI app."""

import httpx
import pytest

from app.client.api_client import ApiError, FitZoneApiClient
from app.client.portal import MemberPortal, SignupRequiresLogin
from app.client.session import SessionGate, SessionState
from app.client.token_store import FileTokenStore, MemoryTokenStore
from app.dependencies import Clients
from app.main import create_app
from app.utils.exceptions import AuthServiceError

from conftest import SIGNUP_PAYLOAD


class RecordingTransport(httpx.AsyncBaseTransport):
    """Counts requests passed on to the wrapped transport."""

    def __init__(self, inner: httpx.AsyncBaseTransport):
        self.inner = inner
        self.calls = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        return await self.inner.handle_async_request(request)


@pytest.fixture
def transport(app):
    return RecordingTransport(httpx.ASGITransport(app=app))


@pytest.fixture
def token_store():
    return MemoryTokenStore()


@pytest.fixture
async def api(transport, token_store):
    client = FitZoneApiClient("http://fitzone.test", token_store, transport=transport)
    yield client
    await client.aclose()


@pytest.fixture
def session(api, token_store):
    return SessionGate(api, token_store)


@pytest.fixture
def portal(api, session):
    return MemberPortal(api, session)


async def test_load_without_token_makes_no_request(session, transport):
    assert session.is_loading
    assert await session.load() == SessionState.ANONYMOUS
    assert transport.calls == 0
    assert not session.is_authenticated


async def test_register_and_load(portal, session, seed_code, token_store):
    seed_code()
    assert await portal.register(dict(SIGNUP_PAYLOAD)) == SessionState.AUTHENTICATED

    assert token_store.load()
    assert session.is_authenticated
    assert session.user["email"] == "a@b.com"
    assert session.subscription["status"] == "ACTIVE"
    assert session.plan["name"] == "Pro Membership"


async def test_rejected_token_is_cleared(session, token_store):
    token_store.save("stale-token")
    assert await session.load() == SessionState.ANONYMOUS
    assert token_store.load() is None
    assert session.user is None


async def test_logout_clears_everything_without_request(portal, session, seed_code, token_store, transport):
    seed_code()
    await portal.register(dict(SIGNUP_PAYLOAD))
    calls = transport.calls

    session.logout()
    assert transport.calls == calls
    assert token_store.load() is None
    assert (session.user, session.subscription, session.plan) == (None, None, None)
    assert session.state == SessionState.ANONYMOUS


async def test_sign_in(portal, session, seed_code, token_store):
    seed_code()
    await portal.register(dict(SIGNUP_PAYLOAD))
    session.logout()

    assert await portal.sign_in("a@b.com", "secret1") == SessionState.AUTHENTICATED
    assert session.is_authenticated


async def test_sign_in_with_inactive_subscription_keeps_no_token(portal, session, seed_code, store, token_store):
    seed_code()
    await portal.register(dict(SIGNUP_PAYLOAD))
    session.logout()
    uid = next(iter(store.collections["users"]))
    store.collection("subscriptions").document(uid).update({"status": "EXPIRED"})

    with pytest.raises(ApiError) as exc_info:
        await portal.sign_in("a@b.com", "secret1")

    assert exc_info.value.status_code == 403
    assert token_store.load() is None
    assert not session.is_authenticated


async def test_sign_in_with_wrong_password(portal, session, seed_code, token_store):
    seed_code()
    await portal.register(dict(SIGNUP_PAYLOAD))
    session.logout()

    with pytest.raises(ApiError) as exc_info:
        await portal.sign_in("a@b.com", "nope-nope")
    assert exc_info.value.status_code == 401
    assert token_store.load() is None


async def test_register_when_sign_in_fails_after_signup(settings, store, identity, seed_code, token_store):
    class FailingExchange:
        async def exchange(self, email, password):
            raise AuthServiceError("Identity service unreachable")

    seed_code()
    app = create_app(settings=settings, clients=Clients(db=store, identity=identity, credentials=FailingExchange()))
    api = FitZoneApiClient("http://fitzone.test", token_store, transport=httpx.ASGITransport(app=app))
    portal = MemberPortal(api, SessionGate(api, token_store))

    with pytest.raises(SignupRequiresLogin) as exc_info:
        await portal.register(dict(SIGNUP_PAYLOAD))
    await api.aclose()

    assert exc_info.value.email == "a@b.com"
    assert exc_info.value.notice == "Account created. Please sign in to continue."
    assert token_store.load() is None


async def test_register_with_used_code(portal, seed_code):
    seed_code(status="USED")
    with pytest.raises(ApiError) as exc_info:
        await portal.register(dict(SIGNUP_PAYLOAD))
    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Contract code is not active"


async def test_check_contract_code(portal, seed_code):
    seed_code()
    assert await portal.check_contract_code(" gym-0001 ") == (True, "")
    assert await portal.check_contract_code("GYM-9999") == (False, "Contract code not found")
    assert await portal.check_contract_code("   ") == (False, "Please enter a contract code")


async def test_load_public_catalog(portal):
    catalog = await portal.load_public_catalog()
    assert [p["id"] for p in catalog.plans] == ["basic", "pro", "elite"]
    assert len(catalog.categories) == 4


async def test_schedule_through_client(portal, api, seed_code):
    seed_code()
    await portal.register(dict(SIGNUP_PAYLOAD))
    sessions = await api.get_schedule(day_of_week="wednesday")
    assert [s["title"] for s in sessions] == ["Lap Swimming"]


class TestResolveRoute:

    async def test_member_route_waits_while_loading(self, session):
        assert session.resolve_route("/member") is None
        assert session.resolve_route("/") == "/"

    async def test_anonymous(self, session):
        await session.load()
        assert session.resolve_route("/member") == "/login"
        assert session.resolve_route("/member/schedule") == "/login"
        assert session.resolve_route("/login") == "/login"
        assert session.resolve_route("/signup") == "/signup"

    async def test_authenticated(self, portal, session, seed_code):
        seed_code()
        await portal.register(dict(SIGNUP_PAYLOAD))
        assert session.resolve_route("/member") == "/member"
        assert session.resolve_route("/login") == "/member"
        assert session.resolve_route("/signup") == "/member"
        assert session.resolve_route("/plans") == "/plans"


def test_file_token_store(tmp_path):
    store = FileTokenStore(tmp_path / "session" / "token.json")
    assert store.load() is None
    store.save("abc")
    assert FileTokenStore(tmp_path / "session" / "token.json").load() == "abc"
    store.clear()
    assert store.load() is None
    store.clear()


class TestLoadFailures:
    """Any failed refresh drops the cached token and ends anonymous."""

    @staticmethod
    def make_session(handler, token_store):
        api = FitZoneApiClient("http://fitzone.test", token_store, transport=httpx.MockTransport(handler))
        return api, SessionGate(api, token_store)

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        token_store = MemoryTokenStore("cached-token")
        api, session = self.make_session(handler, token_store)

        assert await session.load() == SessionState.ANONYMOUS
        assert token_store.load() is None
        assert not session.is_loading
        assert session.resolve_route("/member") == "/login"
        await api.aclose()

    async def test_body_is_not_json(self):
        token_store = MemoryTokenStore("cached-token")
        api, session = self.make_session(lambda request: httpx.Response(200, text="<html>"), token_store)

        assert await session.load() == SessionState.ANONYMOUS
        assert token_store.load() is None
        await api.aclose()

    async def test_body_without_user(self):
        token_store = MemoryTokenStore("cached-token")
        api, session = self.make_session(lambda request: httpx.Response(200, json={"user": None}), token_store)

        assert await session.load() == SessionState.ANONYMOUS
        assert token_store.load() is None
        await api.aclose()


async def test_api_client_wraps_transport_errors(token_store):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    api = FitZoneApiClient("http://fitzone.test", token_store, transport=httpx.MockTransport(handler))
    with pytest.raises(ApiError) as exc_info:
        await api.get_plans()
    await api.aclose()

    assert exc_info.value.status_code == 0
    assert exc_info.value.message.startswith("Network error")
