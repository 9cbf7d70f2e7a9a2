"""Role-gated navigation."""

from .guards import NavigationDecision, check_access, require_admin, require_auth, require_no_auth
from .routes import NOT_FOUND, ROUTES, Guard, Route, navigate, path_for, resolve

__all__ = [
    "NavigationDecision",
    "check_access",
    "require_auth",
    "require_admin",
    "require_no_auth",
    "Guard",
    "Route",
    "ROUTES",
    "NOT_FOUND",
    "navigate",
    "path_for",
    "resolve",
]
