# ABOUTME: Drives artwork lookup over a single file or a directory tree.
# ABOUTME: Applies skip-if-exists idempotency and per-file failure isolation in recursive mode.

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from coverfinder.catalog.http import CatalogFetchError
from coverfinder.catalog.provider import CatalogSearch
from coverfinder.core.pipeline import SearchUnavailableError, resolve_artwork
from coverfinder.core.writer import OutputExistsError, write_artwork
from coverfinder.formats.tags import InvalidFiletypeError, MissingFieldError, read_track_descriptor
from coverfinder.matching.selector import NoCandidatesError

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_NAME = "cover.jpg"


class RecursiveRequiredError(Exception):
    """Raised when a directory is given without recursive mode."""


class ArtworkDownloadError(Exception):
    """Raised when the selected artwork cannot be downloaded."""


class OutcomeStatus(enum.Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


class FailureKind(enum.Enum):
    INVALID_FILETYPE = "invalid_filetype"
    MISSING_FIELD = "missing_field"
    NO_CANDIDATES = "no_candidates"
    SEARCH_UNAVAILABLE = "search_unavailable"
    DOWNLOAD_FAILED = "download_failed"


# Per-file failures that recursive mode recovers from, in match order.
_RECOVERABLE: tuple[tuple[type[Exception], FailureKind], ...] = (
    (InvalidFiletypeError, FailureKind.INVALID_FILETYPE),
    (MissingFieldError, FailureKind.MISSING_FIELD),
    (NoCandidatesError, FailureKind.NO_CANDIDATES),
    (SearchUnavailableError, FailureKind.SEARCH_UNAVAILABLE),
    (ArtworkDownloadError, FailureKind.DOWNLOAD_FAILED),
)
_RECOVERABLE_ERRORS = tuple(error_type for error_type, _ in _RECOVERABLE)

# Files that are not tagged audio are skipped without a warning.
_SILENT_FAILURES = frozenset({FailureKind.INVALID_FILETYPE, FailureKind.MISSING_FIELD})


def _classify(exc: Exception) -> FailureKind:
    for error_type, kind in _RECOVERABLE:
        if isinstance(exc, error_type):
            return kind
    raise TypeError(f"unclassified error: {exc!r}")


@dataclass
class EntryOutcome:
    """What happened to one file during a walk."""

    path: Path
    output_path: Path
    status: OutcomeStatus
    failure: FailureKind | None = None
    error: str | None = None


@dataclass
class WalkSummary:
    """Aggregated outcomes of a recursive walk."""

    outcomes: list[EntryOutcome] = field(default_factory=list)

    def _count(self, status: OutcomeStatus) -> int:
        return sum(1 for o in self.outcomes if o.status is status)

    @property
    def written(self) -> int:
        return self._count(OutcomeStatus.WRITTEN)

    @property
    def skipped(self) -> int:
        return self._count(OutcomeStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(OutcomeStatus.FAILED)


class ArtworkFetcher(Protocol):
    """Finds and downloads artwork for one audio file."""

    async def find_artwork_url(self, path: Path) -> str: ...

    async def download(self, url: str) -> bytes: ...


class CatalogArtworkFetcher:
    """ArtworkFetcher that reads local tags and queries a catalog."""

    def __init__(self, catalog: CatalogSearch) -> None:
        self._catalog = catalog

    async def find_artwork_url(self, path: Path) -> str:
        local = read_track_descriptor(path)
        return await resolve_artwork(local, self._catalog.search)

    async def download(self, url: str) -> bytes:
        try:
            return await self._catalog.download(url)
        except CatalogFetchError as exc:
            raise ArtworkDownloadError(f"Download failed for {url}: {exc}") from exc


def check_target(path: Path, *, recursive: bool) -> None:
    """Reject a directory target unless recursive mode was requested."""
    if path.is_dir() and not recursive:
        raise RecursiveRequiredError("Cannot provide directory unless --recursive,-r is specified")


def _silent(message: str) -> None:
    pass


class ArtworkWalker:
    """Runs the artwork pipeline over a path.

    A single file fails loudly on any error. A directory tree is walked with
    each file isolated: already-covered directories are skipped and per-file
    failures are logged, never raised. Filesystem errors while writing always
    propagate.
    """

    def __init__(
        self,
        fetcher: ArtworkFetcher,
        *,
        output_name: str = DEFAULT_OUTPUT_NAME,
        force: bool = False,
        report: Callable[[str], None] = _silent,
    ) -> None:
        self._fetcher = fetcher
        self._output_name = output_name
        self._force = force
        self._report = report

    def output_path_for(self, path: Path) -> Path:
        """Artwork path for a file: one per containing directory."""
        return path.parent / self._output_name

    async def run(self, path: Path, *, recursive: bool = False) -> WalkSummary:
        """Process a file or, in recursive mode, a directory tree.

        Raises:
            RecursiveRequiredError: If path is a directory and recursive is False.
        """
        check_target(path, recursive=recursive)
        if path.is_dir():
            return await self.process_tree(path)
        return WalkSummary(outcomes=[await self.process_file(path)])

    async def process_file(self, path: Path) -> EntryOutcome:
        """Find, download, and write artwork for one file. Every error propagates."""
        output_path = self.output_path_for(path)
        self._report("Searching for image...")
        url = await self._fetcher.find_artwork_url(path)
        self._report(f"Found image: {url}")
        data = await self._fetcher.download(url)
        self._report(f"Writing to file: {output_path}")
        write_artwork(output_path, data, force=self._force)
        return EntryOutcome(path=path, output_path=output_path, status=OutcomeStatus.WRITTEN)

    async def process_tree(self, root: Path) -> WalkSummary:
        """Walk every file under root, isolating per-file failures."""
        summary = WalkSummary()
        for entry in list(root.rglob("*")):
            if entry.is_dir():
                continue
            summary.outcomes.append(await self._process_entry(entry))
        return summary

    async def _process_entry(self, path: Path) -> EntryOutcome:
        output_path = self.output_path_for(path)
        if not self._force and output_path.exists():
            logger.debug("Skipping %s: %s exists", path, output_path)
            return EntryOutcome(path=path, output_path=output_path, status=OutcomeStatus.SKIPPED)

        try:
            return await self.process_file(path)
        except OutputExistsError:
            logger.debug("Skipping %s: %s appeared during the run", path, output_path)
            return EntryOutcome(path=path, output_path=output_path, status=OutcomeStatus.SKIPPED)
        except _RECOVERABLE_ERRORS as exc:
            kind = _classify(exc)
            if kind in _SILENT_FAILURES:
                logger.debug("Skipping unreadable file %s: %s", path, exc)
            else:
                logger.warning("Skipping %s: %s", path, exc)
            return EntryOutcome(
                path=path,
                output_path=output_path,
                status=OutcomeStatus.FAILED,
                failure=kind,
                error=str(exc),
            )
