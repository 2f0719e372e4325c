"""Exceptions raised by the random sample service."""

from typing import Optional


class RandomSampleError(Exception):
    """Base exception for the random sample service."""
    pass


class HostServiceError(RandomSampleError):
    """The media server failed a call or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class HostAuthError(HostServiceError):
    """The media server rejected the access token."""
    pass


class ConfigurationError(RandomSampleError):
    """The service configuration is missing or invalid."""
    pass
