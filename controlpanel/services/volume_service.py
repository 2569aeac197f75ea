"""Asset volume service."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.models.volume import Volume


class VolumeService:
    async def get_all_volumes(self, db: AsyncSession) -> list[Volume]:
        result = await db.execute(select(Volume).order_by(Volume.name))
        return list(result.scalars().all())


# Singleton instance
_volume_service: VolumeService | None = None


def get_volume_service() -> VolumeService:
    """Get the volume service singleton."""
    global _volume_service
    if _volume_service is None:
        _volume_service = VolumeService()
    return _volume_service
