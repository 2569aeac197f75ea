"""Content field and field layout models."""

import uuid
from enum import Enum
from typing import Any

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from controlpanel.models.base import BaseModel, JSONType


class TranslationMethod(str, Enum):
    """How a field's values vary across sites."""

    NONE = "none"
    SITE = "site"
    SITE_GROUP = "siteGroup"
    LANGUAGE = "language"


class Field(BaseModel):
    """Metadata for one content field."""

    __tablename__ = "fields"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    handle: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(100), nullable=False, default="plain_text")
    translation_method: Mapped[str] = mapped_column(
        String(20), nullable=False, default=TranslationMethod.NONE.value
    )
    settings: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)

    def is_translatable(self, element: Any = None) -> bool:
        """Whether values of this field vary per site for the given element."""
        return self.translation_method != TranslationMethod.NONE.value


class FieldLayout(BaseModel):
    """An ordered arrangement of fields attached to an entity type."""

    __tablename__ = "field_layouts"

    type: Mapped[str] = mapped_column(String(100), nullable=False, default="global_set")

    layout_fields: Mapped[list["FieldLayoutField"]] = relationship(
        back_populates="layout",
        order_by="FieldLayoutField.sort_order",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def fields(self) -> list[Field]:
        return [layout_field.field for layout_field in self.layout_fields]


class FieldLayoutField(BaseModel):
    """A field's placement within a layout."""

    __tablename__ = "field_layout_fields"

    layout_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("field_layouts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    field_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("fields.id", ondelete="CASCADE"),
        nullable=False,
    )
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    layout: Mapped[FieldLayout] = relationship(back_populates="layout_fields")
    field: Mapped[Field] = relationship(lazy="selectin")
