"""Plugin configuration stores package."""

from .base import BasePluginConfigurationStore
from .file_store import FilePluginConfigurationStore
from .jellyfin_store import JellyfinPluginConfigurationStore

__all__ = [
    "BasePluginConfigurationStore",
    "FilePluginConfigurationStore",
    "JellyfinPluginConfigurationStore",
]
