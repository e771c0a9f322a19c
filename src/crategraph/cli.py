"""CLI interface for crategraph using Typer framework."""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from crategraph import __description__, __version__
from crategraph.config import CrateGraphConfig, LogLevel, load_config
from crategraph.errors import RendererNotFoundError, RenderError
from crategraph.models import WorkspaceSnapshot
from crategraph.project import ProjectLoader
from crategraph.render import GraphvizRenderer
from crategraph.view import crate_graph_dot, view_crate_graph

STDOUT = "-"

app = typer.Typer(
    name="crategraph",
    help=__description__,
    add_completion=False,
    rich_markup_mode="rich"
)

# Rendered documents go to stdout, everything else to stderr
console = Console(stderr=True)

ProjectArgument = Annotated[
    Path,
    typer.Argument(help="rust-project.json file or directory containing one (default: current)")
]
ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Configuration file path (default: search for .crategraph.json)")
]


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        typer.echo(f"crategraph version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """crategraph - render workspace crate graphs with Graphviz."""
    ctx.obj = {"verbose": verbose}


def _setup_logging(level: LogLevel, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else level.to_logging(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _prepare(ctx: typer.Context, config_path: Path | None) -> CrateGraphConfig:
    """Load configuration and set up logging for a command."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    _setup_logging(config.logging.level, verbose)
    return config


def _load_workspace(project: Path) -> WorkspaceSnapshot:
    try:
        return ProjectLoader.load(project.resolve())
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


def _write_output(text: str, out: str) -> None:
    if out == STDOUT:
        sys.stdout.write(text)
        sys.stdout.flush()
        return

    output_file = Path(out).resolve()
    try:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot write {escape(str(output_file))}: {escape(str(e))}")
        raise typer.Exit(1)
    console.print(f"[green]Graph written:[/green] {escape(str(output_file))}")


@app.command()
def view(
    ctx: typer.Context,
    project: ProjectArgument = Path("."),
    out: Annotated[
        Optional[str],
        typer.Option("--out", "-o", help="Output SVG file, '-' for stdout (default: from config)")
    ] = None,
    config: ConfigOption = None,
    dot_executable: Annotated[
        Optional[str],
        typer.Option("--dot", help="Graphviz dot executable (default: from config)")
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds to wait for the renderer (default: from config)")
    ] = None,
) -> None:
    """Render the workspace crate graph as SVG."""
    crategraph_config = _prepare(ctx, config)
    db = _load_workspace(project)

    try:
        renderer = GraphvizRenderer(
            executable=dot_executable or crategraph_config.renderer.executable,
            timeout=timeout if timeout is not None else crategraph_config.renderer.timeout_seconds,
        )
        svg = view_crate_graph(db, renderer)
    except RendererNotFoundError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print(f"[dim]{escape(e.hint)}[/dim]")
        raise typer.Exit(1)
    except (RenderError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    _write_output(svg, out or crategraph_config.output.file)


@app.command()
def dot(
    ctx: typer.Context,
    project: ProjectArgument = Path("."),
    out: Annotated[
        str,
        typer.Option("--out", "-o", help="Output DOT file, '-' for stdout")
    ] = STDOUT,
    config: ConfigOption = None,
) -> None:
    """Print the DOT description of the workspace crate graph."""
    _prepare(ctx, config)
    db = _load_workspace(project)
    _write_output(crate_graph_dot(db).decode("utf-8"), out)


@app.command()
def crates(
    ctx: typer.Context,
    project: ProjectArgument = Path("."),
    config: ConfigOption = None,
) -> None:
    """List the crates of a workspace and whether they are rendered."""
    _prepare(ctx, config)
    db = _load_workspace(project)
    graph = db.crate_graph()

    table = Table(title=f"Crates ({len(graph)})")
    table.add_column("Id", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Kind")
    table.add_column("Deps", justify="right")

    for crate_id in graph:
        crate = graph[crate_id]
        is_library = db.source_root(db.file_source_root(crate.root_file_id)).is_library
        kind = "[dim]library[/dim]" if is_library else "[green]workspace[/green]"
        table.add_row(str(crate_id.raw), escape(crate.label), kind, str(len(crate.dependencies)))

    Console().print(table)


if __name__ == "__main__":
    app()
