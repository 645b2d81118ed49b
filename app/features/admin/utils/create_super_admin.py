"""
Script to create a super admin programmatically.

Usage:
    python -m app.features.admin.utils.create_super_admin

Reads DATABASE_URL from the environment / .env like the API does.
"""

import asyncio
import getpass
import sys

from pydantic import ValidationError

from app.features.admin.utils.admin_creator import create_super_admin_programmatically
from app.platform.db.session import build_engine, build_sessionmaker, create_tables
from app.platform.config import settings
from app.platform.exceptions import DuplicateAccount


async def main():
    """Main function to create super admin."""

    print("=== Super Admin Creation Script ===")
    print("This will create a new super admin account.\n")

    name = input("Enter admin name: ").strip()
    email = input("Enter admin email: ").strip()
    if not email:
        print("Error: Email is required")
        sys.exit(1)

    password = getpass.getpass("Enter admin password: ")
    confirm_password = getpass.getpass("Confirm password: ")
    if password != confirm_password:
        print("Error: Passwords do not match")
        sys.exit(1)

    engine = build_engine()
    try:
        if settings.AUTO_CREATE_TABLES:
            await create_tables(engine)

        async with build_sessionmaker(engine)() as db:
            try:
                admin = await create_super_admin_programmatically(db, email, password, name or "Super Admin")
            except ValidationError as e:
                for error in e.errors():
                    print(f"Error: {error['msg']}")
                sys.exit(1)
            except DuplicateAccount as e:
                print(f"Error: {e.detail}")
                sys.exit(1)

            print("\n✅ Super admin created successfully!")
            print(f"   Email: {admin.email}")
            print(f"   ID: {admin.id}")
            print(f"   Role: {admin.role.value}")
            print(f"   Created At: {admin.created_at}")
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
