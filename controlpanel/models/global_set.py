"""Global set model."""

import uuid
from typing import Any

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from controlpanel.forms.base import ErrorsMixin
from controlpanel.models.base import BaseModel, JSONType
from controlpanel.models.field import FieldLayout, FieldLayoutField


class GlobalSet(BaseModel, ErrorsMixin):
    """A named, non-versioned bundle of content with its own field layout."""

    __tablename__ = "global_sets"

    labels = {
        "name": "Name",
        "handle": "Handle",
    }

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    handle: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    field_layout_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("field_layouts.id", ondelete="SET NULL"),
        nullable=True,
    )
    site_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("sites.id", ondelete="SET NULL"),
        nullable=True,
    )
    content: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    field_layout: Mapped[FieldLayout | None] = relationship(lazy="selectin")

    # Global sets always hold per-site content
    localized = True

    def get_layout_fields(self) -> list[FieldLayoutField]:
        if self.field_layout is None:
            return []
        return list(self.field_layout.layout_fields)

    def get_field_value(self, handle: str) -> Any:
        return (self.content or {}).get(handle)

    def set_field_value(self, handle: str, value: Any) -> None:
        # Reassign so the JSON column registers the change
        content = dict(self.content or {})
        content[handle] = value
        self.content = content
