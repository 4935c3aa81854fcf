# ABOUTME: Spotify Web API catalog implementation.
# ABOUTME: Exchanges client credentials for a token, searches tracks, and downloads artwork.

import logging

from coverfinder.catalog.http import CatalogFetchError, HttpClient
from coverfinder.catalog.spotify_parser import parse_search_response, parse_token_response
from coverfinder.config import Credentials
from coverfinder.matching.types import Candidate

logger = logging.getLogger(__name__)

_TOKEN_URL = "https://accounts.spotify.com/api/token"
_SEARCH_URL = "https://api.spotify.com/v1/search"


class AuthError(Exception):
    """Raised when the client-credentials token exchange fails."""


class SpotifyCatalog:
    """Catalog backed by the Spotify Web API.

    The bearer token is acquired once by authenticate() and reused for every
    search in the run; it is never refreshed.
    Uses dependency-injected HttpClient for testability.
    """

    def __init__(self, http_client: HttpClient, credentials: Credentials) -> None:
        self._http = http_client
        self._credentials = credentials
        self._access_token: str | None = None

    async def __aenter__(self) -> "SpotifyCatalog":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self._http.aclose()

    async def authenticate(self) -> None:
        """Fetch a bearer token with the client-credentials grant.

        Raises:
            AuthError: If the request fails or the response carries no token.
        """
        try:
            data = await self._http.post_form(
                _TOKEN_URL,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._credentials.client_id,
                    "client_secret": self._credentials.client_secret,
                },
            )
        except CatalogFetchError as exc:
            raise AuthError(f"Token request failed: {exc}") from exc

        token = parse_token_response(data)
        if token is None:
            raise AuthError("Invalid field in token response: `access_token`")
        self._access_token = token
        logger.debug("Acquired Spotify access token")

    async def search(self, title: str, artist: str) -> list[Candidate]:
        """Search tracks by title and a single artist name.

        Raises:
            AuthError: If authenticate() has not succeeded.
            CatalogFetchError: On transport failure or a malformed response.
        """
        if self._access_token is None:
            raise AuthError("Not authenticated; call authenticate() first")

        params = {"q": f"track:{title} artist:{artist}", "type": "track"}
        data = await self._http.get_json(
            _SEARCH_URL,
            params=params,
            headers={"Authorization": f"Bearer {self._access_token}"},
        )
        candidates = parse_search_response(data)
        logger.debug("Search %r returned %d candidates", params["q"], len(candidates))
        return candidates

    async def download(self, url: str) -> bytes:
        """Fetch artwork bytes from an image URL."""
        return await self._http.get_bytes(url)
