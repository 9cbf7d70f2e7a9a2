"""Authentication against the hosted identity provider."""

from .client import AuthUser, IdentityClient
from .service import AuthService, SessionPersistence

__all__ = ["AuthUser", "IdentityClient", "AuthService", "SessionPersistence"]
