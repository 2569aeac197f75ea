"""Info model: the single-row record of system-wide status."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from controlpanel.forms.base import ErrorsMixin
from controlpanel.models.base import BaseModel


class Info(BaseModel, ErrorsMixin):
    """System status and time zone.

    Only one row is expected; InfoService creates it on first access.
    """

    __tablename__ = "info"

    labels = {
        "on": "System Status",
        "timezone": "Time Zone",
    }

    on: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    timezone: Mapped[str] = mapped_column(String(100), nullable=False, default="UTC")
