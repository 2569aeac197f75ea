#!/usr/bin/env python3
"""
CLI script to create a control panel admin user.

Usage (interactive):
    python scripts/create_admin.py

Usage (non-interactive):
    python scripts/create_admin.py --email admin@example.com --password yourpassword --first-name John --last-name Doe
"""

import argparse
import asyncio
import sys
from getpass import getpass

from pydantic import TypeAdapter, ValidationError
from pydantic.networks import EmailStr
from sqlalchemy import func, select

from controlpanel.database import async_session_factory, engine
from controlpanel.models import User
from controlpanel.utils.security import hash_password

MIN_PASSWORD_LENGTH = 8

_email_adapter = TypeAdapter(EmailStr)


def _valid_email(email: str) -> bool:
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True


async def create_admin(
    email: str | None = None,
    password: str | None = None,
    first_name: str | None = None,
    last_name: str | None = None,
) -> bool:
    """Create an admin user."""
    print("\n" + "=" * 50)
    print("Control Panel - Admin Setup")
    print("=" * 50 + "\n")

    # Get email
    if not email:
        while True:
            email = input("Enter email address: ").strip().lower()
            if _valid_email(email):
                break
            print("Please enter a valid email address.")
    else:
        email = email.strip().lower()
        if not _valid_email(email):
            print("Invalid email address.")
            return False

    # Get password
    if not password:
        while True:
            password = getpass(f"Enter password (min {MIN_PASSWORD_LENGTH} characters): ")
            if len(password) >= MIN_PASSWORD_LENGTH:
                break
            print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

        if password != getpass("Confirm password: "):
            print("\nPasswords do not match. Aborting.")
            return False
    elif len(password) < MIN_PASSWORD_LENGTH:
        print(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")
        return False

    async with async_session_factory() as session:
        result = await session.execute(select(User).where(func.lower(User.email) == email))
        if result.scalar_one_or_none():
            print(f"\nUser with email {email} already exists.")
            return False

        user = User(
            email=email,
            password_hash=hash_password(password),
            first_name=first_name or "",
            last_name=last_name or "",
            admin=True,
            is_active=True,
            language="en",
        )

        session.add(user)
        await session.commit()

        print("\n" + "=" * 50)
        print("Admin Created Successfully!")
        print("=" * 50)
        print(f"  Email: {user.email}")
        print(f"  Name: {user.full_name}")
        print(f"  ID: {user.id}")
        print("=" * 50 + "\n")

        return True


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create a control panel admin user")
    parser.add_argument("--email", "-e", help="Admin email address")
    parser.add_argument("--password", "-p", help=f"Admin password (min {MIN_PASSWORD_LENGTH} chars)")
    parser.add_argument("--first-name", "-f", help="First name", default="")
    parser.add_argument("--last-name", "-l", help="Last name", default="")

    args = parser.parse_args()

    try:
        success = await create_admin(
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nAborted by user.")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
