"""Host library services package."""

from .base import BaseDtoService, BaseLibraryManager, DtoOptions, HostUser, Item, ItemsQuery
from .jellyfin_client import JellyfinClient, authorization_header
from .jellyfin_library import JellyfinDtoService, JellyfinLibraryManager

__all__ = [
    "BaseDtoService",
    "BaseLibraryManager",
    "DtoOptions",
    "HostUser",
    "Item",
    "ItemsQuery",
    "JellyfinClient",
    "authorization_header",
    "JellyfinDtoService",
    "JellyfinLibraryManager",
]
