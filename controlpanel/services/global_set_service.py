"""Global set service."""

import logging
import re
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from controlpanel.models.global_set import GlobalSet
from controlpanel.services.i18n_service import t
from controlpanel.utils.request_context import get_current_language

logger = logging.getLogger(__name__)

HANDLE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_]*$")


class GlobalSetService:
    """Looks up, validates and saves global sets."""

    async def get_all_sets(self, db: AsyncSession) -> list[GlobalSet]:
        result = await db.execute(select(GlobalSet).order_by(GlobalSet.name))
        return list(result.scalars().all())

    async def get_set_by_id(self, db: AsyncSession, global_set_id: uuid.UUID) -> GlobalSet | None:
        """Get a global set by ID, or None if there is no such set."""
        return await db.get(GlobalSet, global_set_id)

    async def validate_set(self, db: AsyncSession, global_set: GlobalSet) -> bool:
        lang = get_current_language()
        global_set.clear_errors()

        for attribute in ("name", "handle"):
            if not (getattr(global_set, attribute) or "").strip():
                global_set.add_error(attribute, f"{global_set.get_attribute_label(attribute)} cannot be blank.")

        if global_set.handle and not global_set.has_errors("handle"):
            if not HANDLE_PATTERN.match(global_set.handle):
                global_set.add_error("handle", t("settings.globals.handle_invalid", lang))
            else:
                query = select(GlobalSet.id).where(GlobalSet.handle == global_set.handle)
                if global_set.id is not None:
                    query = query.where(GlobalSet.id != global_set.id)
                taken = (await db.execute(query)).first()
                if taken:
                    global_set.add_error(
                        "handle", t("settings.globals.handle_taken", lang, handle=global_set.handle)
                    )

        for layout_field in global_set.get_layout_fields():
            if not layout_field.required:
                continue
            value = global_set.get_field_value(layout_field.field.handle)
            if value is None or value == "" or value == []:
                global_set.add_error(
                    layout_field.field.handle,
                    t("fields.required_blank", lang, name=layout_field.field.name),
                )

        return not global_set.has_errors()

    async def save_set(self, db: AsyncSession, global_set: GlobalSet) -> bool:
        """Validate and persist a global set.

        On failure the set is kept out of the session so nothing is written.
        """
        if not await self.validate_set(db, global_set):
            if global_set in db:
                db.expunge(global_set)
            logger.warning(f"Global set not saved: {global_set.errors}")
            return False

        db.add(global_set)
        await db.flush()
        logger.info(f"Saved global set '{global_set.handle}' ({global_set.id})")
        return True


# Singleton instance
_global_set_service: GlobalSetService | None = None


def get_global_set_service() -> GlobalSetService:
    """Get the global set service singleton."""
    global _global_set_service
    if _global_set_service is None:
        _global_set_service = GlobalSetService()
    return _global_set_service
