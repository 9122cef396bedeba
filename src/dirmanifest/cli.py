"""CLI for dir-manifest."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .api import generate_manifest
from .config import load_config
from .errors import FileReadError, RootNotDirectoryError, SkippedEntryError
from .models import FileEntry


app = typer.Typer(help="""\
Generate an MD5 content manifest for a directory tree. The manifest is
written next to the directory as <name>_manifest.json.""")

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)

USAGE = "Usage: dir-manifest <directory>"


def _setup_logging(verbose: bool) -> None:
    """Send library logs to stderr through rich when --verbose is given."""
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _show_progress(completed: int, total: int) -> None:
    typer.echo(f"\rHashed: {completed} / {total}", nl=False)


def _show_read_error(entry: FileEntry, error: FileReadError) -> None:
    err_console.print()
    err_console.print(f"[red]✗[/red] {escape(str(error))}")


def _show_skip(relpath: str, error: SkippedEntryError) -> None:
    err_console.print(f"[yellow]⚠[/yellow] {escape(str(error))}")


def _show_discovered(total: int) -> None:
    console.print(f"Found {total} files. Calculating hashes...")


@app.command()
def generate(
    path: Optional[str] = typer.Argument(None, help="Directory to scan", show_default=False),
    workers: Optional[int] = typer.Option(
        None, "--workers", "-j", min=1, help="Parallel hashing workers (default: 2 x CPU count)"
    ),
    chunk_size: Optional[int] = typer.Option(
        None, "--chunk-size", min=1, help="Bytes read per chunk while hashing"
    ),
    exclude: Optional[List[str]] = typer.Option(
        None, "--exclude", "-x", help="Extra gitignore-style pattern to exclude (repeatable)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="YAML file with workers, chunk_size and exclude settings"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
):
    """Hash every file under PATH and write PATH_manifest.json beside it.

    Manifest files (*manifest.json) and hidden files (.*) are skipped;
    hidden directories are still scanned. Files that cannot be read are
    reported and left out without failing the run.

    Examples:
        # Scan a folder with the default worker count
        dir-manifest game_folder

        # Use 8 workers and skip temporary files
        dir-manifest game_folder -j 8 -x "*.tmp"
    """
    if not path:
        err_console.print(USAGE, markup=False)
        raise typer.Exit(1)

    _setup_logging(verbose)

    exit_code = 0
    try:
        config = load_config(config_file).merged(chunk_size=chunk_size, exclude=exclude)
        result = generate_manifest(
            Path(path),
            workers=workers,
            config=config,
            on_progress=_show_progress,
            on_error=_show_read_error,
            on_skip=_show_skip,
            on_discovered=_show_discovered,
        )
    except RootNotDirectoryError as e:
        err_console.print(f"[red]✗[/red] {escape(str(e))}")
        exit_code = 1
    except Exception as e:
        typer.echo("")
        err_console.print(f"[red]✗[/red] Fatal error: {escape(str(e))}")
        exit_code = 1
    if exit_code:
        raise typer.Exit(exit_code)

    typer.echo("")
    if result.failed:
        err_console.print(
            f"[yellow]⚠[/yellow] {len(result.failed)} of {result.total} files could not be hashed"
        )
    console.print(f"[green]✓[/green] Manifest written to {escape(str(result.output_path))}")


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
