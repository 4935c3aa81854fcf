# ABOUTME: Artwork file writer with explicit overwrite control.
# ABOUTME: Creates the output file, or truncates an existing one only when forced.

from pathlib import Path


class OutputExistsError(Exception):
    """Raised when the artwork file already exists and overwriting is not allowed."""


def write_artwork(dest: Path, data: bytes, *, force: bool = False) -> Path:
    """Write artwork bytes to dest.

    Args:
        dest: Output file path.
        data: Image bytes.
        force: Truncate an existing file instead of failing.

    Returns:
        The written path.

    Raises:
        OutputExistsError: If dest exists and force is False.
        OSError: On any other filesystem failure.
    """
    mode = "wb" if force else "xb"
    try:
        with dest.open(mode) as handle:
            handle.write(data)
    except FileExistsError as exc:
        raise OutputExistsError(f"{dest} already exists (use --force to overwrite)") from exc
    return dest
