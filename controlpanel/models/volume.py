"""Asset volume model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from controlpanel.models.base import BaseModel, JSONType


class Volume(BaseModel):
    """A storage location for assets."""

    __tablename__ = "volumes"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    handle: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    settings: Mapped[dict] = mapped_column(JSONType, nullable=False, default=dict)
