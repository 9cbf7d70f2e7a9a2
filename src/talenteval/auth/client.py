"""
Identity Provider Client

Talks to the hosted identity provider's REST API (Identity Toolkit v1
endpoints). Every provider rejection and transport failure becomes an
AuthFailureError carrying the provider's message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from talenteval.config import settings
from talenteval.core.errors import AuthFailureError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    """Identity returned by the provider."""

    uid: str
    email: str
    email_verified: bool = False
    display_name: str | None = None
    id_token: str | None = None
    refresh_token: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> AuthUser:
        return cls(
            uid=payload["localId"],
            email=payload.get("email", ""),
            email_verified=bool(payload.get("emailVerified", False)),
            display_name=payload.get("displayName") or None,
            id_token=payload.get("idToken"),
            refresh_token=payload.get("refreshToken"),
        )


class IdentityClient:
    """Client for the identity provider's account endpoints."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://identitytoolkit.googleapis.com/v1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the identity client.

        Args:
            api_key: Provider web API key
            base_url: REST base URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls) -> IdentityClient:
        """Create client from application settings."""
        return cls(
            api_key=settings.IDENTITY_API_KEY,
            base_url=settings.IDENTITY_BASE_URL,
            timeout=settings.IDENTITY_TIMEOUT_SECONDS,
        )

    async def sign_up(self, email: str, password: str) -> AuthUser:
        data = await self._post(
            "accounts:signUp", {"email": email, "password": password, "returnSecureToken": True}
        )
        return AuthUser.from_payload(data)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        data = await self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return AuthUser.from_payload(data)

    async def send_email_verification(self, id_token: str) -> None:
        await self._post("accounts:sendOobCode", {"requestType": "VERIFY_EMAIL", "idToken": id_token})

    async def send_password_reset(self, email: str) -> None:
        await self._post("accounts:sendOobCode", {"requestType": "PASSWORD_RESET", "email": email})

    async def lookup(self, id_token: str) -> AuthUser:
        """Resolve an ID token to the user it belongs to."""
        data = await self._post("accounts:lookup", {"idToken": id_token})
        users = data.get("users") or []
        if not users:
            raise AuthFailureError("INVALID_ID_TOKEN")
        return AuthUser.from_payload({**users[0], "idToken": id_token})

    async def _post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST to a provider endpoint and return the decoded JSON body.

        Raises:
            AuthFailureError: If the provider rejects the request or is unreachable
        """
        url = f"{self.base_url}/{endpoint}"

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(url, params={"key": self.api_key}, json=payload)

            if response.status_code != 200:
                message = _error_message(response)
                logger.warning(
                    f"Identity provider rejected {endpoint}: {message}",
                    extra={"status_code": response.status_code},
                )
                raise AuthFailureError(message)

            data: dict[str, Any] = response.json()
            return data

        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling identity provider: {e}")
            raise AuthFailureError(f"Identity provider unavailable: {e}") from e
        except ValueError as e:
            logger.error(f"Malformed identity provider response: {e}")
            raise AuthFailureError("Malformed identity provider response") from e


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    error = body.get("error") if isinstance(body, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return f"HTTP {response.status_code}"
