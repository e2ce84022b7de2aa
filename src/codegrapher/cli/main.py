"""Code grapher CLI: scan a Swift project and write its dependency graph."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import DiscoveryMode, DuplicatePolicy, Settings, load_settings
from ..errors import GraphError
from ..graph import GraphStore
from ..indexer.service import BuildResult, GraphService
from ..logging_utils import configure_logging
from ..output import write_graph

console = Console()
app = typer.Typer(add_completion=False)


def _resolve_settings(
    config_path: Optional[Path],
    output: Optional[Path],
    merge_duplicates: bool,
    fail_fast: bool,
    workers: Optional[int],
    git_tracked: bool,
) -> Settings:
    if config_path and not config_path.exists():
        raise GraphError(f"Config file not found: {config_path}")
    try:
        settings = load_settings(config_path)
    except (yaml.YAMLError, ValidationError) as exc:
        raise GraphError(f"Invalid configuration: {exc}") from exc
    if output:
        settings.output_path = Path(output).expanduser().resolve()
    if merge_duplicates:
        settings.duplicate_policy = DuplicatePolicy.MERGE
    if fail_fast:
        settings.fail_fast = True
    if workers:
        settings.workers = workers
    if git_tracked:
        settings.discovery = DiscoveryMode.GIT
    return settings


@app.command()
def scan(
    root: Optional[Path] = typer.Argument(None, help="Root directory of the Swift project"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: ./codegraph.json)"
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to codegrapher.yaml"),
    merge_duplicates: bool = typer.Option(
        False, "--merge-duplicates", help="Merge same-named types instead of keeping the last one"
    ),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Abort on the first bad file"),
    workers: Optional[int] = typer.Option(None, "--workers", "-j", min=1, help="Parser threads"),
    git_tracked: bool = typer.Option(False, "--git-tracked", help="Only scan files tracked by git"),
    summary: bool = typer.Option(False, "--summary", help="Print a table of the extracted entities"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Scan ROOT for .swift files and write codegraph.json."""
    if root is None:
        console.print("Usage: codegrapher <path-to-swift-project>")
        raise typer.Exit(1)
    configure_logging(verbose)

    try:
        settings = _resolve_settings(config, output, merge_duplicates, fail_fast, workers, git_tracked)
        project = root.expanduser().resolve()
        console.print(f"Scanning directory: {escape(str(project))}")
        result = GraphService(settings).build(project)
        if not result.files:
            console.print(f"No .swift files found in {escape(str(project))}.")
            return
        written = write_graph(result.store, settings.output_path)
    except GraphError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(1)

    _report_failures(result)
    if summary:
        console.print(_summary_table(result.store))
    console.print(
        f"[green]Wrote {len(result.store)} entities from {len(result.files)} files to:[/green] "
        f"{escape(str(written))}"
    )


def _report_failures(result: BuildResult) -> None:
    if result.ok:
        return
    console.print(f"[yellow]Skipped {len(result.failures)} file(s):[/yellow]")
    for failure in result.failures:
        console.print(f"  {escape(failure.path)}: {escape(failure.reason)}")


def _summary_table(store: GraphStore) -> Table:
    table = Table(title="Code graph")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Inherits (approx.)")
    table.add_column("Conforms (approx.)")
    table.add_column("Properties", justify="right")
    table.add_column("Methods", justify="right")
    for name in store.names():
        entity = store.get(name)
        table.add_row(
            entity.name,
            entity.kind,
            ", ".join(entity.inherited_types),
            ", ".join(entity.conformed_protocols),
            str(len(entity.properties)),
            str(len(entity.methods)),
        )
    return table


def run() -> None:
    app()
