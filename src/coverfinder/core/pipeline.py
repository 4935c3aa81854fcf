# ABOUTME: Artwork resolution pipeline for a single local track.
# ABOUTME: Searches the catalog, selects the best candidate, and returns its artwork URL.

import logging
from collections.abc import Awaitable, Callable

from coverfinder.catalog.http import CatalogFetchError
from coverfinder.matching.selector import select_artwork_url
from coverfinder.matching.types import Candidate, TrackDescriptor

logger = logging.getLogger(__name__)

SearchFn = Callable[[str, str], Awaitable[list[Candidate]]]


class SearchUnavailableError(Exception):
    """Raised when the catalog search cannot be completed."""


async def resolve_artwork(local: TrackDescriptor, search_fn: SearchFn) -> str:
    """Find the artwork URL of the catalog track that best matches `local`.

    The query carries only the primary artist, since the catalog accepts a
    single artist filter; selection still compares the full artist list.

    Raises:
        SearchUnavailableError: If the search request fails.
        NoCandidatesError: If the search yields no usable candidates.
    """
    try:
        candidates = await search_fn(local.title, local.primary_artist)
    except CatalogFetchError as exc:
        raise SearchUnavailableError(f"Search failed for {local.title!r}: {exc}") from exc

    logger.debug("Selecting among %d candidates for %r", len(candidates), local.title)
    return select_artwork_url(local, candidates)
