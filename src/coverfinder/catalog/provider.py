# ABOUTME: CatalogSearch protocol defining the contract for track search sources.
# ABOUTME: The match pipeline depends only on this, so tests can supply fakes.

from typing import Protocol, runtime_checkable

from coverfinder.matching.types import Candidate


@runtime_checkable
class CatalogSearch(Protocol):
    """Protocol for a music catalog that can search tracks and serve artwork.

    search returns candidates in the catalog's own relevance order.
    """

    async def search(self, title: str, artist: str) -> list[Candidate]: ...

    async def download(self, url: str) -> bytes: ...
