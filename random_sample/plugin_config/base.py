"""Base class for plugin configuration stores."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class BasePluginConfigurationStore(ABC):
    """Abstract base class for the host's per-plugin configuration object.

    The configuration object is a generic JSON object shared by every
    feature of the plugin; each feature owns one named section in it.
    """

    @abstractmethod
    def get_configuration(self) -> Dict[str, Any]:
        """Load the whole plugin configuration object.

        Returns:
            Configuration object (empty dict if nothing is stored)

        Raises:
            HostServiceError: If the store cannot be read
        """
        pass

    @abstractmethod
    def update_configuration(self, configuration: Dict[str, Any]) -> None:
        """Replace the whole plugin configuration object.

        Raises:
            HostServiceError: If the store cannot be written
        """
        pass

    def load_section(self, key: str) -> Any:
        """Return one section of the configuration, or None if absent."""
        return self.get_configuration().get(key)

    def save_section(self, key: str, value: Any) -> None:
        """Read-modify-write one section, keeping every other section."""
        configuration = self.get_configuration()
        configuration[key] = value
        self.update_configuration(configuration)
