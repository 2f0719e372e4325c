"""Configuration settings for the server."""

import os
from pathlib import Path

from random_sample.utils.config import Config, load_config

# random_sample/server/config.py -> random_sample/server -> random_sample -> root
PROJECT_ROOT = Path(__file__).parent.parent.parent
CONFIG_PATH = Path(os.getenv("RANDOM_SAMPLE_CONFIG", str(PROJECT_ROOT / "config" / "random_sample.yaml")))


def load_server_config() -> Config:
    """Load service configuration from the YAML file and environment."""
    return load_config(str(CONFIG_PATH))
