# ABOUTME: Audio tag extraction using mutagen.
# ABOUTME: Builds a TrackDescriptor from a file's title, artist, and album tags.

import logging
from pathlib import Path

import mutagen
from mutagen import MutagenError

from coverfinder.matching.types import TrackDescriptor

logger = logging.getLogger(__name__)

ARTIST_SEPARATOR = ", "


class TagReadError(Exception):
    """Base class for failures to build a TrackDescriptor from a file."""


class InvalidFiletypeError(TagReadError):
    """Raised when a file is not a readable, supported audio format."""


class MissingFieldError(TagReadError):
    """Raised when a required tag (title, artist, album) is absent or blank."""

    def __init__(self, field: str, path: Path) -> None:
        super().__init__(f"Missing {field} tag in {path}")
        self.field = field
        self.path = path


def _first_value(audio: mutagen.FileType, key: str, path: Path) -> str:
    values = audio.get(key) or []
    for value in values:
        text = str(value).strip()
        if text:
            return str(value)
    raise MissingFieldError(key, path)


def split_artists(artist_values: list[str]) -> tuple[str, ...]:
    """Split artist tag values on ", " into individual names, dropping blanks."""
    names = []
    for value in artist_values:
        names.extend(name for name in str(value).split(ARTIST_SEPARATOR) if name.strip())
    return tuple(names)


def read_track_descriptor(path: Path) -> TrackDescriptor:
    """Read title, artists, and album from an audio file's tags.

    Args:
        path: Path to an audio file in any format mutagen supports.

    Returns:
        A TrackDescriptor with at least one artist.

    Raises:
        InvalidFiletypeError: If the file cannot be parsed as tagged audio.
        MissingFieldError: If title, artist, or album is missing.
    """
    try:
        audio = mutagen.File(path, easy=True)
    except (MutagenError, OSError) as exc:
        raise InvalidFiletypeError(f"Cannot read tags from {path}: {exc}") from exc
    if audio is None:
        raise InvalidFiletypeError(f"Unsupported file type: {path}")

    title = _first_value(audio, "title", path)
    artists = split_artists(audio.get("artist") or [])
    if not artists:
        raise MissingFieldError("artist", path)
    album = _first_value(audio, "album", path)

    logger.debug("Read tags from %s: %r by %s on %r", path, title, artists, album)
    return TrackDescriptor(title=title, artists=artists, album=album)
