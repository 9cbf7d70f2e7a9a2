#!/usr/bin/env python3
"""
Create the first administrator account.

Usage:
    python scripts/create_admin.py admin@school.edu 's3cret-pass'
    python scripts/create_admin.py admin@school.edu 's3cret-pass' --name "Head Coach"
"""

import argparse
import asyncio
import sys

from talenteval.admin import create_admin_user
from talenteval.auth import AuthService, IdentityClient
from talenteval.core.database import AsyncSessionLocal, close_db, init_db
from talenteval.core.errors import TalentEvalError
from talenteval.core.logging import setup_logging
from talenteval.storage.profiles import ProfileStore


async def main(email: str, password: str, display_name: str) -> int:
    await init_db()
    try:
        profile = await create_admin_user(
            AuthService(IdentityClient.from_settings()),
            ProfileStore(AsyncSessionLocal),
            email,
            password,
            display_name,
        )
    except TalentEvalError as e:
        print(f"❌ Could not create admin: {e.message}")
        return 1
    finally:
        await close_db()

    print(f"✅ Admin created: {profile.email} ({profile.id})")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an active ADMIN account")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default="Admin User", help="Display name")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    setup_logging(args.log_level)
    sys.exit(asyncio.run(main(args.email, args.password, args.name)))
