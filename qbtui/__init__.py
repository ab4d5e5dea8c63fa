"""qBittorrent Web API client, state and rich renderables for a terminal interface."""

__version__ = "0.1.0"