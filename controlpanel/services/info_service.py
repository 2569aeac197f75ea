"""Info service: system status and time zone."""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.config import settings as app_settings
from controlpanel.models.info import Info
from controlpanel.services.i18n_service import t
from controlpanel.utils.request_context import get_current_language
from controlpanel.utils.timezones import is_region_timezone

logger = logging.getLogger(__name__)


class InfoService:
    """Loads and saves the single Info row."""

    async def get_info(self, db: AsyncSession) -> Info:
        """Get the info record, creating it with defaults on first access."""
        result = await db.execute(select(Info).order_by(Info.created_at).limit(1))
        info = result.scalar_one_or_none()

        if info is None:
            info = Info(on=True, timezone=app_settings.default_timezone)
            db.add(info)
            await db.flush()
            logger.info("Created the info record")

        return info

    def validate_info(self, info: Info) -> bool:
        info.clear_errors()

        if not info.timezone:
            info.add_error("timezone", f"{info.get_attribute_label('timezone')} cannot be blank.")
        elif not is_region_timezone(info.timezone):
            info.add_error(
                "timezone",
                t("settings.general.timezone_invalid", get_current_language(), timezone=info.timezone),
            )

        return not info.has_errors()

    async def save_info(self, db: AsyncSession, info: Info) -> bool:
        """Validate and persist the info record.

        When validation fails the record is detached from the session so the
        submitted values stay on the object (for redisplay) but are never
        written.
        """
        if not self.validate_info(info):
            if info in db:
                db.expunge(info)
            logger.warning(f"Info not saved: {info.errors}")
            return False

        db.add(info)
        await db.flush()
        logger.info(f"Saved info (on={info.on}, timezone={info.timezone})")
        return True


# Singleton instance
_info_service: InfoService | None = None


def get_info_service() -> InfoService:
    """Get the info service singleton."""
    global _info_service
    if _info_service is None:
        _info_service = InfoService()
    return _info_service
