# ABOUTME: Parsing functions for Spotify Web API JSON responses.
# ABOUTME: Converts track search results into Candidate instances, dropping malformed items.

import logging
from typing import Any

from coverfinder.catalog.http import CatalogFetchError
from coverfinder.matching.types import ArtworkRef, Candidate

logger = logging.getLogger(__name__)


def parse_artwork_refs(images: Any) -> tuple[ArtworkRef, ...]:
    """Convert a Spotify `images` array into ArtworkRefs, keeping the API order.

    Spotify lists the widest image first. Entries without a string url are skipped.
    """
    if not isinstance(images, list):
        return ()
    refs = []
    for image in images:
        if not isinstance(image, dict) or not isinstance(image.get("url"), str):
            continue
        width = image.get("width")
        height = image.get("height")
        refs.append(
            ArtworkRef(
                url=image["url"],
                width=width if isinstance(width, int) else None,
                height=height if isinstance(height, int) else None,
            )
        )
    return tuple(refs)


def parse_track(item: Any) -> Candidate | None:
    """Parse one entry of `tracks.items` into a Candidate.

    Returns None when the entry lacks a name, album name, any artist, or any image.
    """
    if not isinstance(item, dict):
        return None

    title = item.get("name")
    album = item.get("album")
    if not isinstance(title, str) or not isinstance(album, dict):
        return None
    album_name = album.get("name")
    if not isinstance(album_name, str):
        return None

    artists_data = item.get("artists")
    if not isinstance(artists_data, list):
        return None
    artists = tuple(
        artist["name"]
        for artist in artists_data
        if isinstance(artist, dict) and isinstance(artist.get("name"), str)
    )

    candidate = Candidate(
        title=title,
        artists=artists,
        album=album_name,
        artwork_refs=parse_artwork_refs(album.get("images")),
    )
    if not candidate.is_well_formed:
        return None
    return candidate


def parse_search_response(data: Any) -> list[Candidate]:
    """Parse a Spotify track search response into candidates in result order.

    Raises:
        CatalogFetchError: If the response has no `tracks.items` array.
    """
    tracks = data.get("tracks") if isinstance(data, dict) else None
    items = tracks.get("items") if isinstance(tracks, dict) else None
    if not isinstance(items, list):
        raise CatalogFetchError("Malformed search response: missing tracks.items array")

    candidates = []
    for item in items:
        candidate = parse_track(item)
        if candidate is None:
            logger.debug("Dropping malformed search result: %r", item)
            continue
        candidates.append(candidate)
    return candidates


def parse_token_response(data: Any) -> str | None:
    """Extract the bearer token from a client-credentials token response."""
    if not isinstance(data, dict):
        return None
    token = data.get("access_token")
    return token if isinstance(token, str) and token else None
