# ABOUTME: Shared pytest fixtures for Coverfinder tests.
# ABOUTME: Provides credential directories, a sample track, and an album directory tree.

from pathlib import Path

import pytest

from coverfinder.matching.types import TrackDescriptor


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """A config directory holding valid Spotify credential files."""
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "client_id").write_text("test-client-id\n")
    (directory / "client_secret").write_text("  test-client-secret  \n")
    return directory


@pytest.fixture
def abbey_road_track() -> TrackDescriptor:
    """Local metadata for a well-known track."""
    return TrackDescriptor(
        title="Come Together",
        artists=("The Beatles",),
        album="Abbey Road",
    )


@pytest.fixture
def music_tree(tmp_path: Path) -> Path:
    """Create a small music library tree.

    Layout:
        Music/
            The Beatles/
                Abbey Road/
                    01 Come Together.mp3
                    02 Something.mp3
            Radiohead/
                OK Computer/
                    01 Airbag.flac
                    notes.txt
            Misc/
                broken.mp3
    """
    root = tmp_path / "Music"

    abbey = root / "The Beatles" / "Abbey Road"
    abbey.mkdir(parents=True)
    (abbey / "01 Come Together.mp3").write_bytes(b"fake mp3")
    (abbey / "02 Something.mp3").write_bytes(b"fake mp3")

    ok_computer = root / "Radiohead" / "OK Computer"
    ok_computer.mkdir(parents=True)
    (ok_computer / "01 Airbag.flac").write_bytes(b"fake flac")
    (ok_computer / "notes.txt").write_text("liner notes")

    misc = root / "Misc"
    misc.mkdir(parents=True)
    (misc / "broken.mp3").write_bytes(b"not really audio")

    return root
