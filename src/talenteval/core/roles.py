"""
Roles, profile statuses and the role permission table.
"""

from enum import StrEnum


class Role(StrEnum):
    """Role assigned to a user profile."""

    ADMIN = "ADMIN"
    TEACHER = "TEACHER"
    COACH = "COACH"


class ProfileStatus(StrEnum):
    """Profile status; only active profiles may use the dashboard."""

    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"


DEFAULT_ROLE = Role.TEACHER
DEFAULT_STATUS = ProfileStatus.PENDING

ROLE_NAMES: dict[Role, str] = {
    Role.ADMIN: "Administrator",
    Role.TEACHER: "Teacher",
    Role.COACH: "Coach",
}

ROLE_PERMISSIONS: dict[Role, frozenset[str]] = {
    Role.ADMIN: frozenset(
        {"manage_users", "manage_roles", "view_all", "edit_all", "manage_templates"}
    ),
    Role.TEACHER: frozenset({"view_assigned", "edit_assigned", "view_templates"}),
    Role.COACH: frozenset({"view_sport", "edit_sport", "view_templates"}),
}


def permissions_for(role: str | None) -> frozenset[str]:
    """Permission set for a role name; unknown or missing roles have none."""
    try:
        return ROLE_PERMISSIONS[Role(role)]
    except ValueError:
        return frozenset()
