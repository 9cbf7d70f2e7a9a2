"""
Pytest Configuration and Fixtures

Shared test fixtures for unit and API tests.
"""

import json
import os

# Point the application at an in-memory database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("IDENTITY_API_KEY", "test-key")

import httpx
import pytest
from sqlalchemy.pool import StaticPool

from talenteval.auth import AuthService, IdentityClient
from talenteval.core.database import build_engine, build_session_factory, init_db
from talenteval.storage.profiles import ProfileStore
from talenteval.storage.records import RecordStore


class FakeIdentityProvider:
    """In-memory stand-in for the identity provider's REST endpoints."""

    def __init__(self) -> None:
        self.accounts: dict[str, dict] = {}  # email -> account
        self.tokens: dict[str, str] = {}  # id token -> email
        self.oob_requests: list[dict] = []
        self._counter = 0

    def create_account(self, email: str, password: str) -> tuple[str, str]:
        """Register an account directly; returns (uid, id_token)."""
        self._counter += 1
        uid = f"uid-{self._counter}"
        self.accounts[email] = {"localId": uid, "email": email, "password": password}
        return uid, self.issue_token(email)

    def issue_token(self, email: str) -> str:
        self._counter += 1
        token = f"token-{self.accounts[email]['localId']}-{self._counter}"
        self.tokens[token] = email
        return token

    def _session_payload(self, email: str) -> dict:
        account = self.accounts[email]
        return {
            "localId": account["localId"],
            "email": email,
            "idToken": self.issue_token(email),
            "refreshToken": f"refresh-{account['localId']}",
        }

    @staticmethod
    def _error(message: str) -> httpx.Response:
        return httpx.Response(400, json={"error": {"code": 400, "message": message}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        endpoint = request.url.path.rsplit("/", 1)[-1]
        payload = json.loads(request.content or b"{}")

        if endpoint == "accounts:signUp":
            email = payload.get("email", "")
            if email in self.accounts:
                return self._error("EMAIL_EXISTS")
            if len(payload.get("password", "")) < 6:
                return self._error("WEAK_PASSWORD : Password should be at least 6 characters")
            self.create_account(email, payload["password"])
            return httpx.Response(200, json=self._session_payload(email))

        if endpoint == "accounts:signInWithPassword":
            account = self.accounts.get(payload.get("email", ""))
            if account is None:
                return self._error("EMAIL_NOT_FOUND")
            if account["password"] != payload.get("password"):
                return self._error("INVALID_PASSWORD")
            return httpx.Response(200, json=self._session_payload(account["email"]))

        if endpoint == "accounts:sendOobCode":
            if payload.get("requestType") == "PASSWORD_RESET":
                if payload.get("email") not in self.accounts:
                    return self._error("EMAIL_NOT_FOUND")
            elif payload.get("idToken") not in self.tokens:
                return self._error("INVALID_ID_TOKEN")
            self.oob_requests.append(payload)
            return httpx.Response(200, json={"email": payload.get("email", "")})

        if endpoint == "accounts:lookup":
            email = self.tokens.get(payload.get("idToken", ""))
            if email is None:
                return self._error("INVALID_ID_TOKEN")
            account = self.accounts[email]
            return httpx.Response(
                200,
                json={"users": [{"localId": account["localId"], "email": email, "emailVerified": False}]},
            )

        return httpx.Response(404, json={"error": {"message": "NOT_FOUND"}})


@pytest.fixture
async def async_engine():
    """Create an isolated in-memory database for each test."""
    engine = build_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(async_engine):
    return build_session_factory(async_engine)


@pytest.fixture
def record_store(session_factory) -> RecordStore:
    return RecordStore(session_factory)


@pytest.fixture
def profile_store(session_factory) -> ProfileStore:
    return ProfileStore(session_factory)


@pytest.fixture
def identity_provider() -> FakeIdentityProvider:
    return FakeIdentityProvider()


@pytest.fixture
def identity_client(identity_provider: FakeIdentityProvider) -> IdentityClient:
    return IdentityClient(
        api_key="test-key",
        base_url="https://identity.test/v1",
        transport=httpx.MockTransport(identity_provider.handler),
    )


@pytest.fixture
def auth_service(identity_client: IdentityClient) -> AuthService:
    return AuthService(identity_client)
