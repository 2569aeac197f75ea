"""FastAPI dependencies providing request-scoped state to route handlers."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.database import get_db
from controlpanel.exceptions import ForbiddenException
from controlpanel.models.site import Site
from controlpanel.models.user import User
from controlpanel.services.auth_service import get_auth_service
from controlpanel.services.site_service import get_site_service
from controlpanel.utils.request_context import get_current_user_id


async def get_current_user(db: AsyncSession = Depends(get_db)) -> User:
    """The signed-in user.

    Raises:
        UserContextError: If nobody is signed in
        UnauthorizedException: If the token's user no longer exists or is inactive
    """
    return await get_auth_service().get_current_user(db, get_current_user_id())


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """The signed-in user, who must be an admin.

    Raises:
        ForbiddenException: If the user is not an admin
    """
    if not current_user.admin:
        raise ForbiddenException()
    return current_user


async def get_current_site(db: AsyncSession = Depends(get_db)) -> Site | None:
    return await get_site_service().get_current_site(db)
