"""
Profile/role store: user profiles, role assignments and the activity log.

Every mutating profile operation appends an activity entry once its own write
has committed. Activity logging runs in a separate session and never raises:
a failed log write is reported through the logger and the parent operation
still succeeds.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from talenteval.core.errors import (
    DuplicateIdentifierError,
    NotFoundError,
    StorageUnavailableError,
    TalentEvalError,
)
from talenteval.core.models import ActivityLogEntry, Assignment, UserProfile
from talenteval.core.roles import (
    DEFAULT_ROLE,
    DEFAULT_STATUS,
    ROLE_NAMES,
    ProfileStatus,
    permissions_for,
)
from talenteval.core.validation import validate_email, validate_role, validate_status

logger = logging.getLogger(__name__)

# Profile fields a caller may set through create_profile / update_profile
PROFILE_FIELDS = ("email", "display_name", "role", "status", "assignments")

DUPLICATE_PROFILE_MESSAGE = "Profile already exists for this user"


class ActivityType:
    """Type tags written to the activity log."""

    PROFILE_CREATED = "profile_created"
    PROFILE_UPDATE = "profile_update"
    ROLE_UPDATE = "role_update"
    STATUS_UPDATE = "status_update"
    ACCOUNT_ACTIVATED = "account_activated"
    ACCOUNT_DEACTIVATED = "account_deactivated"


class ProfileStore:
    """Wrapper over the users, assignments and activities tables."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        activity_session_factory: async_sessionmaker[AsyncSession] | None = None,
    ):
        self._session_factory = session_factory
        self._activity_session_factory = activity_session_factory or session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except IntegrityError as e:
            logger.warning(f"Integrity error while trying to {action}: {e.orig}")
            if _is_profile_key_violation(e):
                raise DuplicateIdentifierError(DUPLICATE_PROFILE_MESSAGE) from e
            raise StorageUnavailableError(f"Failed to {action}: {e.orig}") from e
        except SQLAlchemyError as e:
            logger.error(f"Database error while trying to {action}: {e}")
            raise StorageUnavailableError(f"Failed to {action}: {e}") from e

    @staticmethod
    async def _profile_exists(session: AsyncSession, user_id: str) -> bool:
        return await session.get(UserProfile, user_id) is not None

    @staticmethod
    async def _require(session: AsyncSession, user_id: str) -> UserProfile:
        profile = await session.get(UserProfile, user_id)
        if profile is None:
            raise NotFoundError(f"User not found with ID: {user_id}")
        return profile

    # ========================================================================
    # Profiles
    # ========================================================================

    async def create_profile(self, user_id: str, data: Mapping[str, Any]) -> UserProfile:
        """Create a profile; role defaults to TEACHER and status to pending.

        Provided fields are applied over the defaults.

        Raises:
            DuplicateIdentifierError: If a profile already exists for this user
            ValidationFailureError: If email, role or status is malformed
        """
        fields = _clean_profile_fields(data)
        fields.setdefault("role", DEFAULT_ROLE.value)
        fields.setdefault("status", DEFAULT_STATUS.value)

        async with self._session("create user profile") as session:
            if await self._profile_exists(session, user_id):
                raise DuplicateIdentifierError(DUPLICATE_PROFILE_MESSAGE)

            profile = UserProfile(id=user_id, **fields)
            session.add(profile)
            await session.commit()

        await self.append_activity(
            ActivityType.PROFILE_CREATED,
            f"Profile created with role {profile.role}",
            user_id,
            details={"role": profile.role, "status": profile.status},
        )
        return profile

    async def get_profile(self, user_id: str) -> UserProfile | None:
        async with self._session("get user profile") as session:
            return await session.get(UserProfile, user_id)

    async def update_profile(self, user_id: str, partial: Mapping[str, Any]) -> None:
        """Apply the provided fields to an existing profile."""
        fields = _clean_profile_fields(partial)

        async with self._session("update user profile") as session:
            profile = await self._require(session, user_id)
            for field, value in fields.items():
                setattr(profile, field, value)
            profile.updated_at = datetime.now(UTC)
            await session.commit()

        await self.append_activity(
            ActivityType.PROFILE_UPDATE,
            "Profile updated",
            user_id,
            details={"fields": sorted(fields)},
        )

    async def set_role(
        self, user_id: str, role: str, assignments: Mapping[str, Any] | None = None
    ) -> None:
        """Assign a role and its assignment data.

        Non-empty assignment data is also written to the assignments table;
        empty data removes any existing assignments record.
        """
        new_role = validate_role(role)
        assignment_data = _clean_assignments(assignments)

        async with self._session("assign role") as session:
            profile = await self._require(session, user_id)
            profile.role = new_role.value
            profile.assignments = assignment_data
            profile.updated_at = datetime.now(UTC)

            record = await session.get(Assignment, user_id)
            if assignment_data:
                if record is None:
                    record = Assignment(user_id=user_id, role=new_role.value)
                    session.add(record)
                record.role = new_role.value
                record.students = assignment_data.get("students", [])
                record.teams = assignment_data.get("teams", [])
                record.updated_at = datetime.now(UTC)
            elif record is not None:
                await session.delete(record)

            await session.commit()

        await self.append_activity(
            ActivityType.ROLE_UPDATE,
            f"Role changed to {ROLE_NAMES[new_role]}",
            user_id,
            details={"new_role": new_role.value},
        )

    async def set_status(self, user_id: str, status: str) -> None:
        """Change a profile's status (pending, active, inactive)."""
        new_status = validate_status(status)

        async with self._session("update user status") as session:
            profile = await self._require(session, user_id)
            profile.status = new_status.value
            profile.updated_at = datetime.now(UTC)
            await session.commit()

        activity_type = {
            ProfileStatus.ACTIVE: ActivityType.ACCOUNT_ACTIVATED,
            ProfileStatus.INACTIVE: ActivityType.ACCOUNT_DEACTIVATED,
        }.get(new_status, ActivityType.STATUS_UPDATE)
        await self.append_activity(
            activity_type,
            f"Status changed to {new_status.value}",
            user_id,
            details={"new_status": new_status.value},
        )

    async def activate(self, user_id: str) -> None:
        await self.set_status(user_id, ProfileStatus.ACTIVE)

    async def deactivate(self, user_id: str) -> None:
        await self.set_status(user_id, ProfileStatus.INACTIVE)

    async def list_all_profiles(self) -> list[UserProfile]:
        async with self._session("get users") as session:
            result = await session.execute(select(UserProfile).order_by(UserProfile.created_at))
            return list(result.scalars().all())

    async def list_profiles_by_role(
        self, role: str, active_only: bool = False
    ) -> list[UserProfile]:
        wanted = validate_role(role)
        stmt = select(UserProfile).where(UserProfile.role == wanted.value)
        if active_only:
            stmt = stmt.where(UserProfile.status == ProfileStatus.ACTIVE.value)

        async with self._session("get users by role") as session:
            result = await session.execute(stmt.order_by(UserProfile.created_at))
            return list(result.scalars().all())

    async def list_active_profiles(self) -> list[UserProfile]:
        async with self._session("get active users") as session:
            result = await session.execute(
                select(UserProfile)
                .where(UserProfile.status == ProfileStatus.ACTIVE.value)
                .order_by(UserProfile.created_at)
            )
            return list(result.scalars().all())

    # ========================================================================
    # Assignments and permissions
    # ========================================================================

    async def get_assignments(self, user_id: str) -> Assignment | None:
        async with self._session("get assignments") as session:
            return await session.get(Assignment, user_id)

    async def validate_assignment(self, user_id: str, student_id: str) -> bool:
        """Whether an active user has the student assigned, directly or via a team."""
        try:
            profile = await self.get_profile(user_id)
            if profile is None or profile.status != ProfileStatus.ACTIVE.value:
                return False

            assignments = await self.get_assignments(user_id)
            if assignments is None:
                return False

            return assignments.covers(str(student_id))
        except TalentEvalError as e:
            logger.error(f"Assignment validation failed: {e.message}")
            return False

    async def has_permission(self, user_id: str, permission: str) -> bool:
        """Whether the user's role grants the permission."""
        try:
            profile = await self.get_profile(user_id)
        except TalentEvalError as e:
            logger.error(f"Permission check failed: {e.message}")
            return False

        if profile is None or not profile.role:
            return False
        return permission in permissions_for(profile.role)

    async def validate_user_role(self, user_id: str, required_role: str) -> bool:
        """Whether the user is active and holds exactly `required_role`."""
        try:
            wanted = validate_role(required_role)
            profile = await self.get_profile(user_id)
        except TalentEvalError as e:
            logger.error(f"Role validation failed: {e.message}")
            return False

        if profile is None or profile.status != ProfileStatus.ACTIVE.value:
            return False
        return profile.role == wanted.value

    # ========================================================================
    # Activity log
    # ========================================================================

    async def append_activity(
        self,
        activity_type: str,
        description: str,
        user_id: str,
        details: Mapping[str, Any] | None = None,
    ) -> bool:
        """Append an entry to the activity log.

        Best-effort: returns False instead of raising when the write fails.
        """
        try:
            async with self._activity_session_factory() as session:
                session.add(
                    ActivityLogEntry(
                        type=activity_type,
                        description=description,
                        user_id=user_id,
                        details=dict(details or {}),
                        timestamp=datetime.now(UTC),
                    )
                )
                await session.commit()
        except Exception as e:
            logger.error(
                f"Failed to log activity: {e}",
                extra={"activity_type": activity_type, "user_id": user_id},
            )
            return False
        return True

    async def list_activities(self, limit: int = 50) -> list[ActivityLogEntry]:
        """Most recent activity entries first."""
        async with self._session("get activities") as session:
            result = await session.execute(
                select(ActivityLogEntry).order_by(ActivityLogEntry.timestamp.desc()).limit(limit)
            )
            return list(result.scalars().all())

    async def list_user_activities(self, user_id: str, limit: int = 50) -> list[ActivityLogEntry]:
        async with self._session("get user activities") as session:
            result = await session.execute(
                select(ActivityLogEntry)
                .where(ActivityLogEntry.user_id == user_id)
                .order_by(ActivityLogEntry.timestamp.desc())
                .limit(limit)
            )
            return list(result.scalars().all())


def _clean_profile_fields(data: Mapping[str, Any]) -> dict[str, Any]:
    """Keep known profile fields and normalize their values."""
    fields = {k: v for k, v in data.items() if k in PROFILE_FIELDS and v is not None}

    if "email" in fields:
        fields["email"] = validate_email(fields["email"])
    if "role" in fields:
        fields["role"] = validate_role(fields["role"]).value
    if "status" in fields:
        fields["status"] = validate_status(fields["status"]).value
    if "assignments" in fields:
        fields["assignments"] = _clean_assignments(fields["assignments"])

    return fields


def _clean_assignments(assignments: Mapping[str, Any] | None) -> dict[str, Any]:
    """Drop empty assignment lists; an empty result means 'no assignments'."""
    if not assignments:
        return {}

    cleaned: dict[str, Any] = {}
    students = [str(s) for s in assignments.get("students") or []]
    if students:
        cleaned["students"] = students

    teams = [
        {"name": str(team.get("name", "")), "students": [str(s) for s in team.get("students") or []]}
        for team in assignments.get("teams") or []
    ]
    if teams:
        cleaned["teams"] = teams

    return cleaned


def _is_profile_key_violation(error: IntegrityError) -> bool:
    """Primary-key collision on the users table (SQLite or PostgreSQL wording)."""
    message = str(error.orig).lower()
    return "users.id" in message or "users_pkey" in message
