"""JSON file plugin configuration store."""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from random_sample.errors import HostServiceError
from .base import BasePluginConfigurationStore


logger = logging.getLogger(__name__)


class FilePluginConfigurationStore(BasePluginConfigurationStore):
    """Plugin configuration kept in a local JSON file.

    Useful when the service runs without a media server plugin to hold
    its settings. A missing file reads as an empty configuration.
    """

    def __init__(self, path: str):
        self.path = Path(path)
        logger.info(f"File configuration store: {self.path}")

    def get_configuration(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise HostServiceError(f"Failed to read {self.path}: {e}") from e

        if not isinstance(data, dict):
            logger.warning(f"Ignoring non-object configuration in {self.path}")
            return {}
        return data

    def update_configuration(self, configuration: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(configuration, f, indent=2)
        except OSError as e:
            raise HostServiceError(f"Failed to write {self.path}: {e}") from e
        logger.info(f"Configuration written to {self.path}")
