"""SQLAlchemy models for the control panel."""

from controlpanel.models.base import Base, BaseModel, JSONType, TimestampMixin
from controlpanel.models.field import Field, FieldLayout, FieldLayoutField, TranslationMethod
from controlpanel.models.global_set import GlobalSet
from controlpanel.models.info import Info
from controlpanel.models.site import Site
from controlpanel.models.system_settings import SystemSettings
from controlpanel.models.user import User
from controlpanel.models.volume import Volume

__all__ = [
    # Base
    "Base",
    "BaseModel",
    "JSONType",
    "TimestampMixin",
    # Settings
    "SystemSettings",
    "Info",
    # Users and sites
    "User",
    "Site",
    # Assets
    "Volume",
    # Content
    "Field",
    "FieldLayout",
    "FieldLayoutField",
    "TranslationMethod",
    "GlobalSet",
]
