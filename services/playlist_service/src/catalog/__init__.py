"""Music catalog access: the client protocol the resolver depends on and its Spotify implementation."""

from .protocol import CatalogClient
from .spotify_client import SpotifyCatalogClient

__all__ = ["CatalogClient", "SpotifyCatalogClient"]
