# ABOUTME: CLI for Coverfinder, built on Click.
# ABOUTME: Finds cover art for one audio file or a directory tree and saves it beside the audio.

import asyncio
import logging
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from coverfinder.catalog.http import CatalogHttpClient
from coverfinder.catalog.spotify import AuthError, SpotifyCatalog
from coverfinder.config import (
    DEFAULT_CONFIG_DIR,
    ConfigMissingError,
    Credentials,
    load_credentials,
)
from coverfinder.core.pipeline import SearchUnavailableError
from coverfinder.core.walker import (
    DEFAULT_OUTPUT_NAME,
    ArtworkDownloadError,
    ArtworkWalker,
    CatalogArtworkFetcher,
    RecursiveRequiredError,
    WalkSummary,
    check_target,
)
from coverfinder.core.writer import OutputExistsError
from coverfinder.formats.tags import TagReadError
from coverfinder.matching.selector import NoCandidatesError


LOG_TAG = "SPOT_IMG_SEARCH"

_FATAL_ERRORS = (
    ConfigMissingError,
    AuthError,
    RecursiveRequiredError,
    TagReadError,
    NoCandidatesError,
    SearchUnavailableError,
    ArtworkDownloadError,
    OutputExistsError,
    OSError,
)


def _create_catalog(credentials: Credentials) -> SpotifyCatalog:
    """Create the default catalog (Spotify Web API)."""
    return SpotifyCatalog(http_client=CatalogHttpClient(), credentials=credentials)


def _configure_logging(verbose: bool) -> None:
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


async def _find_covers(
    path: Path,
    *,
    recursive: bool,
    output: str,
    force: bool,
    config_dir: Path,
    console: Console,
) -> WalkSummary:
    def report(message: str) -> None:
        console.print(f"{LOG_TAG}: {message}", markup=False, highlight=False, soft_wrap=True)

    credentials = load_credentials(config_dir)
    async with _create_catalog(credentials) as catalog:
        await catalog.authenticate()
        walker = ArtworkWalker(
            CatalogArtworkFetcher(catalog),
            output_name=output,
            force=force,
            report=report,
        )
        return await walker.run(path, recursive=recursive)


def _print_summary(console: Console, summary: WalkSummary) -> None:
    parts = [
        f"[green]{summary.written} written[/green]",
        f"[yellow]{summary.skipped} skipped[/yellow]",
        f"[red]{summary.failed} failed[/red]",
    ]
    console.print(f"Done: {', '.join(parts)}")


@click.command()
@click.version_option(package_name="coverfinder")
@click.argument("file", type=click.Path(exists=True, path_type=Path))
@click.option(
    "-r",
    "--recursive",
    is_flag=True,
    default=False,
    help="Search a directory tree, saving one image per directory.",
)
@click.option(
    "-o",
    "--output",
    default=DEFAULT_OUTPUT_NAME,
    show_default=True,
    help="Filename for the image, written next to each audio file.",
)
@click.option(
    "-f",
    "--force",
    is_flag=True,
    default=False,
    help="Overwrite an existing output file.",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_CONFIG_DIR,
    envvar="COVERFINDER_CONFIG_DIR",
    help=f"Directory holding client_id and client_secret (default: {DEFAULT_CONFIG_DIR}).",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def cli(
    file: Path,
    recursive: bool,
    output: str,
    force: bool,
    config_dir: Path,
    verbose: bool,
) -> None:
    """Find album artwork for FILE on Spotify and save it beside the audio."""
    console = Console()
    _configure_logging(verbose)

    try:
        check_target(file, recursive=recursive)
        summary = asyncio.run(
            _find_covers(
                file,
                recursive=recursive,
                output=output,
                force=force,
                config_dir=config_dir,
                console=console,
            )
        )
    except _FATAL_ERRORS as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}", soft_wrap=True)
        raise SystemExit(1) from exc

    if file.is_dir():
        _print_summary(console, summary)
