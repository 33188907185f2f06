#!/usr/bin/env python3
"""
Create (or reset) an administrator account.

Usage:
    python scripts/create_admin.py admin@octaiq.com --password 'secret'
    python scripts/create_admin.py viewer@octaiq.com --role viewer
"""

import argparse
import asyncio
import getpass
import os
import sys

from sqlalchemy import select

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from portal.core.security import UserRole, get_password_hash
from portal.db.base import Base
from portal.db.session import AsyncSessionLocal, engine
from portal.models.user import User


async def create_admin(email: str, password: str, role: str, create_tables: bool = False) -> User:
    if create_tables:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async with AsyncSessionLocal() as db:
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(email=email, password_hash=get_password_hash(password), role=role)
            db.add(user)
            print(f"✅ Created {role} account {email}")
        else:
            user.password_hash = get_password_hash(password)
            user.role = role
            user.is_active = True
            print(f"✅ Updated existing account {email} ({role})")
        await db.commit()
        await db.refresh(user)

    await engine.dispose()
    return user


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin dashboard account")
    parser.add_argument("email", help="Login email")
    parser.add_argument("--password", help="Password (prompted when omitted)")
    parser.add_argument(
        "--role",
        choices=[r.value for r in UserRole],
        default=UserRole.ADMIN.value,
        help="Account role",
    )
    parser.add_argument("--create-tables", action="store_true", help="Create tables first (dev only)")

    args = parser.parse_args()
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 8:
        print("❌ Password must be at least 8 characters")
        sys.exit(1)

    asyncio.run(create_admin(args.email.strip().lower(), password, args.role, args.create_tables))
