"""Administrative tools listed on the settings index."""

from dataclasses import dataclass

from controlpanel.services.i18n_service import t


@dataclass(frozen=True)
class Tool:
    """Descriptor for a maintenance utility shown in the control panel."""

    handle: str
    icon: str

    def display_name(self, lang: str = "en") -> str:
        return t(f"tools.{self.handle}", lang)


ASSET_INDEX = Tool(handle="asset_index", icon="photo")
CLEAR_CACHES = Tool(handle="clear_caches", icon="trash")
DB_BACKUP = Tool(handle="db_backup", icon="database")
FIND_AND_REPLACE = Tool(handle="find_and_replace", icon="search")
SEARCH_INDEX = Tool(handle="search_index", icon="list")


def available_tools(volume_count: int) -> list[Tool]:
    """Tools for the settings index.

    Updating asset indexes only makes sense once a volume exists.
    """
    tools = []
    if volume_count:
        tools.append(ASSET_INDEX)
    tools.extend([CLEAR_CACHES, DB_BACKUP, FIND_AND_REPLACE, SEARCH_INDEX])
    return tools
