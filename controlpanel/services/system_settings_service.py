"""System settings service: category-keyed key/value settings storage."""

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.config import settings as app_settings
from controlpanel.forms.mail_settings import MailSettings
from controlpanel.models.system_settings import SystemSettings

logger = logging.getLogger(__name__)

EMAIL_SETTINGS_KEY = "email"


class SystemSettingsService:
    """Reads and writes settings categories stored in the system_settings table."""

    async def _get_row(self, db: AsyncSession, category: str) -> SystemSettings | None:
        result = await db.execute(
            select(SystemSettings).where(SystemSettings.key == category)
        )
        return result.scalar_one_or_none()

    async def get_settings(self, db: AsyncSession, category: str) -> dict[str, Any]:
        """Get the stored mapping for a category ({} when nothing is stored)."""
        row = await self._get_row(db, category)
        return dict(row.value) if row and row.value else {}

    async def save_settings(self, db: AsyncSession, category: str, values: dict[str, Any]) -> None:
        """Replace the stored mapping for a category."""
        row = await self._get_row(db, category)

        if row:
            row.value = dict(values)
        else:
            row = SystemSettings(key=category, value=dict(values))
            db.add(row)

        await db.flush()
        logger.info(f"Saved '{category}' settings")

    async def get_email_settings(self, db: AsyncSession) -> MailSettings:
        """Get the stored email settings, filled in from config defaults."""
        stored = await self.get_settings(db, EMAIL_SETTINGS_KEY)

        mail_settings = MailSettings(
            from_email=app_settings.email_from_address,
            from_name=app_settings.email_from_name,
            transport_type=app_settings.email_transport_type,
        )
        mail_settings.set_attributes(stored)
        if mail_settings.transport_settings is None:
            mail_settings.transport_settings = {}
        return mail_settings


# Singleton instance
_system_settings_service: SystemSettingsService | None = None


def get_system_settings_service() -> SystemSettingsService:
    """Get the system settings service singleton."""
    global _system_settings_service
    if _system_settings_service is None:
        _system_settings_service = SystemSettingsService()
    return _system_settings_service
