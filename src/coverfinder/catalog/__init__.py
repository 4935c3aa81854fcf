# ABOUTME: Catalog package for talking to the Spotify Web API.
# ABOUTME: Exports the search protocol, the Spotify client, and its HTTP transport.

from coverfinder.catalog.http import CatalogFetchError, CatalogHttpClient
from coverfinder.catalog.provider import CatalogSearch
from coverfinder.catalog.spotify import AuthError, SpotifyCatalog

__all__ = [
    "AuthError",
    "CatalogFetchError",
    "CatalogHttpClient",
    "CatalogSearch",
    "SpotifyCatalog",
]
