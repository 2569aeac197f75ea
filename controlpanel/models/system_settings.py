"""SystemSettings model for platform-wide configuration."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from controlpanel.models.base import BaseModel, JSONType


class SystemSettings(BaseModel):
    """Key-value store for system settings, one row per category.

    Used for storing configuration that is managed at runtime
    via the control panel (e.g. the "email" category).
    """

    __tablename__ = "system_settings"

    key: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    value: Mapped[dict] = mapped_column(
        JSONType,
        nullable=False,
        default=dict,
    )
