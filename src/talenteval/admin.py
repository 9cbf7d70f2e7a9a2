"""
Admin account bootstrap.

The first administrator cannot be approved by anyone, so it is created
directly: an identity-provider account plus an ADMIN profile that is already
active.
"""

import logging

from talenteval.auth import AuthService
from talenteval.core.models import UserProfile
from talenteval.core.roles import ProfileStatus, Role
from talenteval.storage.profiles import ProfileStore

logger = logging.getLogger(__name__)


async def create_admin_user(
    auth: AuthService,
    profiles: ProfileStore,
    email: str,
    password: str,
    display_name: str = "Admin User",
) -> UserProfile:
    """Register `email` and give it an active ADMIN profile.

    Raises:
        AuthFailureError: The provider rejected the registration
        DuplicateIdentifierError: A profile already exists for the new uid
    """
    user = await auth.register(email, password)
    profile = await profiles.create_profile(
        user.uid,
        {
            "email": user.email or email,
            "display_name": display_name,
            "role": Role.ADMIN,
            "status": ProfileStatus.ACTIVE,
        },
    )
    logger.info(f"Admin user created: {user.uid}")
    return profile
