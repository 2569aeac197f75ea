"""Authentication service for login and user lookup."""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.exceptions import UnauthorizedException
from controlpanel.models.user import User
from controlpanel.schemas.auth import LoginRequest
from controlpanel.utils.security import create_access_token, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """Service for handling authentication operations."""

    async def login(self, db: AsyncSession, request: LoginRequest) -> tuple[str, User]:
        """Authenticate a user and issue an access token.

        Returns:
            Tuple of (access token, User)

        Raises:
            UnauthorizedException: If credentials are invalid
        """
        result = await db.execute(
            select(User).where(func.lower(User.email) == request.email.lower())
        )
        user = result.scalar_one_or_none()

        if not user or not verify_password(request.password, user.password_hash):
            raise UnauthorizedException("Invalid email or password")

        if not user.is_active:
            raise UnauthorizedException("Your account is inactive")

        user.last_login_at = datetime.now(timezone.utc)
        await db.flush()

        logger.info(f"User {user.id} signed in")
        return create_access_token(user_id=user.id, name=user.full_name), user

    async def get_current_user(self, db: AsyncSession, user_id: uuid.UUID) -> User:
        """Load the signed-in user.

        Raises:
            UnauthorizedException: If the user no longer exists or is inactive
        """
        user = await db.get(User, user_id)
        if not user or not user.is_active:
            raise UnauthorizedException("User not found or inactive")
        return user


# Singleton instance
_auth_service: AuthService | None = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService()
    return _auth_service
