"""Site service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.models.site import Site


class SiteService:
    async def get_current_site(self, db: AsyncSession) -> Site | None:
        """The primary site, falling back to the first site created."""
        result = await db.execute(
            select(Site).order_by(Site.primary.desc(), Site.created_at).limit(1)
        )
        return result.scalar_one_or_none()


# Singleton instance
_site_service: SiteService | None = None


def get_site_service() -> SiteService:
    """Get the site service singleton."""
    global _site_service
    if _site_service is None:
        _site_service = SiteService()
    return _site_service
