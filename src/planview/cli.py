"""Command Line Interface for Planview.

Render floor plan specifications to PNG, show their legend and room
tables, or run a full generation request through the view controller.
"""

import asyncio
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import config
from .core.errors import GenerationError
from .core.model import Layout, SourceKind, ViewState
from .core.styles import style_for
from .core.validators import InvalidLayout
from .engine.generator import PlaceholderGenerator, RoutingGenerator, default_generator
from .geom.openings import OpeningPlacement
from .io.parser import load_layout
from .legend import legend_rows, summarize
from .view.controller import ViewController
from .visualization.generator import RasterSurface, generate_plan_image

app = typer.Typer(
    name="planview",
    help="A CLI tool for generating, rendering and inspecting floor plans",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def setup(
    log_level: str = typer.Option(config.LOG_LEVEL, "--log-level", help="Logging level"),
):
    logging.basicConfig(
        level=log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load(layout_file: Path) -> Layout:
    layout = load_layout(str(layout_file))
    console.print(f"[green]✓[/green] Loaded {len(layout.rooms)} rooms from {layout_file}")
    return layout


@app.command()
def render(
    layout_file: Path = typer.Argument(..., help="Path to layout specification JSON"),
    output: Path = typer.Option(
        config.EXPORT_DIR / config.EXPORT_FILENAME, "--out", "-o", help="Output PNG path"
    ),
    zoom: float = typer.Option(config.ZOOM_DEFAULT, "--zoom", "-z", help="Zoom factor (0.5 - 2.0)"),
    placement: OpeningPlacement = typer.Option(
        OpeningPlacement(config.OPENING_PLACEMENT), "--placement", help="How doors are positioned"
    ),
):
    """Render a layout specification to a PNG image."""
    try:
        layout = _load(layout_file)
        view = ViewState().with_zoom(zoom)
        path = generate_plan_image(layout, output, view, placement)
        console.print(f"[green]✓[/green] Floor plan saved to {path}")
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except (GenerationError, InvalidLayout) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def legend(
    layout_file: Path = typer.Argument(..., help="Path to layout specification JSON"),
):
    """Show the grouped room legend of a layout."""
    try:
        layout = _load(layout_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except (GenerationError, InvalidLayout) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    summary = summarize(layout)
    table = Table(title="Legend")
    table.add_column("Group", style="cyan")
    table.add_column("Room", style="green")
    table.add_column("Fill")
    table.add_column("Border")
    for title, name, fill, border in legend_rows(summary):
        table.add_row(title, name, f"[{fill}]■[/] {fill}", f"[{border}]■[/] {border}")
    console.print(table)

    for bucket in summary:
        if not bucket.rooms:
            console.print(f"[dim]{bucket.title}: none[/dim]")


@app.command()
def generate(
    payload: str = typer.Argument(..., help="Description text, image data URL, or JSON spec"),
    kind: SourceKind = typer.Option(SourceKind.TEXT, "--kind", "-k", help="Input source kind"),
    output: Path = typer.Option(
        config.EXPORT_DIR / config.EXPORT_FILENAME, "--out", "-o", help="Output PNG path"
    ),
    zoom_steps: int = typer.Option(
        0, "--zoom-steps", help="Zoom in (positive) or out (negative) by this many steps"
    ),
    offline: bool = typer.Option(
        False, "--offline", help="Use the placeholder layout instead of the inference service"
    ),
):
    """Generate a floor plan from user input and export it."""
    generator = (
        RoutingGenerator(inference=PlaceholderGenerator(delay=0)) if offline else default_generator()
    )
    controller = ViewController(generator=generator, surface=RasterSurface())

    with console.status("Generating floor plan..."):
        outcome = asyncio.run(controller.submit(payload, kind))

    if not outcome.applied:
        console.print(f"[red]Error: {outcome.status.message}[/red]")
        if outcome.status.error_kind:
            console.print(f"[dim]kind: {outcome.status.error_kind}[/dim]")
        raise typer.Exit(1)

    step = controller.zoom_in if zoom_steps > 0 else controller.zoom_out
    for _ in range(abs(zoom_steps)):
        step()

    path = controller.export_image(output)
    console.print(f"[green]✓[/green] {outcome.status.message} (zoom {controller.zoom:g})")
    console.print(f"[green]✓[/green] Floor plan saved to {path}")


@app.command()
def info(
    layout_file: Path = typer.Argument(..., help="Path to layout specification JSON"),
):
    """Show information about a layout."""
    try:
        layout = _load(layout_file)
    except FileNotFoundError as e:
        console.print(f"[red]Error: File not found - {e}[/red]")
        raise typer.Exit(1)
    except (GenerationError, InvalidLayout) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"\n[bold]Layout[/bold] ({layout.source_kind.value}, {layout.width:g} x {layout.height:g})")

    console.print(f"\n[cyan]Rooms: {len(layout.rooms)}[/cyan]")
    room_table = Table()
    room_table.add_column("ID", style="cyan")
    room_table.add_column("Name", style="green")
    room_table.add_column("Category")
    room_table.add_column("Position", justify="center")
    room_table.add_column("Size", justify="center")
    for room in layout.rooms:
        style = style_for(room.category)
        room_table.add_row(
            room.id,
            room.name,
            f"[{style.border}]{room.category}[/]",
            f"({room.x:g}, {room.y:g})",
            f"{room.width:g} x {room.height:g}",
        )
    console.print(room_table)

    console.print(f"\n[cyan]Openings: {len(layout.openings)}[/cyan]")
    if layout.openings:
        opening_table = Table()
        opening_table.add_column("ID", style="cyan")
        opening_table.add_column("Kind", style="green")
        opening_table.add_column("Rooms")
        opening_table.add_column("Wall", justify="center")
        for opening in layout.openings:
            rooms = ", ".join(layout.room(room_id).name for room_id in opening.room_ids)
            wall = opening.wall.value if opening.wall else "-"
            opening_table.add_row(opening.id, opening.kind.value, rooms, wall)
        console.print(opening_table)


@app.command()
def serve(
    host: str = typer.Option(config.WEB_HOST, "--host", help="Bind address"),
    port: int = typer.Option(config.WEB_PORT, "--port", "-p", help="Port"),
):
    """Run the web interface."""
    from .web import create_app

    console.print(f"[blue]ℹ[/blue] Server running at http://localhost:{port}")
    create_app().run(host=host, port=port)


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
