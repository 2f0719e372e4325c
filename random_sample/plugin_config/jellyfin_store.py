"""Jellyfin plugin configuration store."""

import logging
from typing import Any, Dict

from random_sample.errors import ConfigurationError, HostServiceError
from random_sample.library.jellyfin_client import JellyfinClient
from .base import BasePluginConfigurationStore


logger = logging.getLogger(__name__)


class JellyfinPluginConfigurationStore(BasePluginConfigurationStore):
    """Plugin configuration persisted by the media server.

    Reads and writes /Plugins/{plugin_id}/Configuration with the token
    of whoever operates the panel.
    """

    def __init__(self, client: JellyfinClient, plugin_id: str, token: str):
        if not plugin_id:
            raise ConfigurationError("plugin.id must be set to use the jellyfin configuration store")
        self.client = client
        self.plugin_id = plugin_id
        self.token = token

    @property
    def endpoint(self) -> str:
        return f"/Plugins/{self.plugin_id}/Configuration"

    def get_configuration(self) -> Dict[str, Any]:
        data = self.client.get_json(self.endpoint, self.token)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise HostServiceError(f"Plugin configuration for {self.plugin_id} is not an object")
        return data

    def update_configuration(self, configuration: Dict[str, Any]) -> None:
        self.client.post_json(self.endpoint, self.token, configuration)
        logger.info(f"Plugin configuration {self.plugin_id} updated")
