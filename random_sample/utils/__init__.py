"""Utility modules for the random sample service.

Common utilities used across the project.
"""

from random_sample.utils.config import Config, load_config, validate_config
from random_sample.utils.logger import setup_logging

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "setup_logging",
]
