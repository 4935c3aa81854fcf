# ABOUTME: Credential configuration for the Spotify client-credentials flow.
# ABOUTME: Reads client_id and client_secret from plaintext files in a config directory.

from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_DIR = Path.home() / ".config" / "spotify-image-search"

CLIENT_ID_FILE = "client_id"
CLIENT_SECRET_FILE = "client_secret"


class ConfigMissingError(Exception):
    """Raised when a credential file is absent, unreadable, or empty."""


@dataclass(frozen=True)
class Credentials:
    """Spotify application credentials."""

    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return f"Credentials(client_id={self.client_id!r}, client_secret='***')"


def _read_value(path: Path) -> str:
    try:
        value = path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigMissingError(f"Cannot read {path}: {exc.strerror or exc}") from exc
    if not value:
        raise ConfigMissingError(f"{path} is empty")
    return value


def load_credentials(config_dir: Path | None = None) -> Credentials:
    """Load Spotify credentials from a config directory.

    Args:
        config_dir: Directory holding `client_id` and `client_secret` files.
            Defaults to ~/.config/spotify-image-search.

    Returns:
        The stripped credential values.

    Raises:
        ConfigMissingError: If either file is missing, unreadable, or empty.
    """
    directory = config_dir or DEFAULT_CONFIG_DIR
    return Credentials(
        client_id=_read_value(directory / CLIENT_ID_FILE),
        client_secret=_read_value(directory / CLIENT_SECRET_FILE),
    )
