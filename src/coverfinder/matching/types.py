# ABOUTME: Core data structures for local tracks and catalog search candidates.
# ABOUTME: TrackDescriptor and Candidate are the interchange types of the matching pipeline.

from dataclasses import dataclass


@dataclass(frozen=True)
class TrackDescriptor:
    """Metadata read from a local audio file.

    Built once per file by the tag reader. Artists keep their tag order but
    are compared as an unordered collection during scoring.
    """

    title: str
    artists: tuple[str, ...]
    album: str

    @property
    def primary_artist(self) -> str:
        """First listed artist, the only one the catalog query can carry."""
        return self.artists[0]


@dataclass(frozen=True)
class ArtworkRef:
    """One image of a candidate's album art."""

    url: str
    width: int | None = None
    height: int | None = None


@dataclass(frozen=True)
class Candidate:
    """A track returned by a catalog search.

    artwork_refs is ordered primary image first; position 0 is the one downloaded.
    """

    title: str
    artists: tuple[str, ...]
    album: str
    artwork_refs: tuple[ArtworkRef, ...] = ()

    @property
    def is_well_formed(self) -> bool:
        """Whether the candidate can be scored and yields an image."""
        return bool(self.artists) and bool(self.artwork_refs)

    @property
    def artwork_url(self) -> str:
        return self.artwork_refs[0].url


@dataclass(frozen=True)
class ScoredCandidate:
    """A candidate paired with its match distance (lower is better)."""

    candidate: Candidate
    score: int
