"""Site model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from controlpanel.models.base import BaseModel


class Site(BaseModel):
    """A front-end site; the primary site is the control panel's current site."""

    __tablename__ = "sites"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    handle: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    language: Mapped[str] = mapped_column(String(12), nullable=False, default="en")
    primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
