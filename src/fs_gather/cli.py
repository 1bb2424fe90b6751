from __future__ import annotations

import json
import logging
import sys
from typing import List, Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from fs_gather.attributes import read_attributes
from fs_gather.collector import FileCollector, FileFoundEvent
from fs_gather.config import GatherConfig, load_config
from fs_gather.utils.paths import matches_pattern

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="Gather files from paths, directories and wildcard patterns.",
)
console = Console(stderr=True)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _build_config(
    config: Optional[str],
    recurse: Optional[bool],
    ignore_dir_attributes: Optional[bool],
    prohibit: Optional[List[str]],
) -> GatherConfig:
    cfg = load_config(config) if config else GatherConfig()
    if recurse is not None:
        cfg.recurse = recurse
    if ignore_dir_attributes is not None:
        cfg.ignore_directory_attributes = ignore_dir_attributes
    if prohibit:
        cfg.prohibited_attributes = prohibit
    return cfg


def _exclude_handler(patterns: List[str]):
    def handler(_collector: FileCollector, event: FileFoundEvent) -> None:
        if any(matches_pattern(event.file.name, p) for p in patterns):
            event.ignore = True

    return handler


# ---------------------------------------------------------------------------
# Gathering
# ---------------------------------------------------------------------------
@app.command()
def gather(
    paths: List[str] = typer.Argument(..., help="Files, directories or wildcard patterns"),
    config: Optional[str] = typer.Option(None, "-c", "--config", help="YAML/JSON GatherConfig file"),
    recurse: Optional[bool] = typer.Option(None, "--recurse/--no-recurse", help="Descend into subdirectories"),
    ignore_dir_attributes: Optional[bool] = typer.Option(
        None,
        "--ignore-dir-attributes/--check-dir-attributes",
        help="Do not prune directories by their attributes",
    ),
    prohibit: Optional[List[str]] = typer.Option(
        None, "--prohibit", help="Attribute to skip (repeatable); 'none' allows everything"
    ),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", help="File name pattern to leave out (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print entries as JSON"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Debug logging"),
) -> None:
    """List every file the given specs resolve to, in discovery order."""
    setup_logging(verbose)
    try:
        cfg = _build_config(config, recurse, ignore_dir_attributes, prohibit)
        collector = FileCollector(
            config=cfg,
            on_file_found=_exclude_handler(exclude) if exclude else None,
        )
        collector.add_many(paths)
    except (ValidationError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        raise typer.Exit(code=2)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    entries = collector.to_list()
    logger.info("Gathered %d files from %d path specs", len(entries), len(paths))
    if as_json:
        payload = [
            {
                "path": str(e.path),
                "size": e.size,
                "mtime_ns": e.mtime_ns,
                "attributes": e.attributes.names(),
            }
            for e in entries
        ]
        typer.echo(json.dumps(payload, indent=2))
    else:
        for e in entries:
            typer.echo(str(e.path))
    console.print(f"[green]✔[/green] {len(entries)} files")


# ---------------------------------------------------------------------------
# Inspection
# ---------------------------------------------------------------------------
@app.command()
def attributes(path: str = typer.Argument(..., help="File or directory to inspect")) -> None:
    """Print the attribute flags a path is filtered on."""
    try:
        attrs = read_attributes(path)
    except FileNotFoundError:
        console.print(f"[red]Not found:[/red] {escape(path)}")
        raise typer.Exit(code=1)
    typer.echo(", ".join(attrs.names()) or "none")


if __name__ == "__main__":
    app()
