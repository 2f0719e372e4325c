"""Random library sample service for Jellyfin-style media servers."""

__version__ = "0.1.0"
