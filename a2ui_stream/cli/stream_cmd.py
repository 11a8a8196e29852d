"""Stream commands (replay, validate)"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..catalog import get_component_type
from ..config import load_config
from ..protocol.messages import validate_jsonl
from ..stream.engine import IngestionEngine

console = Console()


def _chunks(text: str, size: int):
    for start in range(0, len(text), size):
        yield text[start:start + size]


def register_stream_commands(app: typer.Typer):
    """Register stream commands to the main app"""

    @app.command("replay")
    def replay(
        path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Recorded agent stream"),
        chunk_size: int = typer.Option(16, "--chunk-size", min=1, help="Characters per simulated token"),
        config: Path = typer.Option(None, "--config", help="Stream config file (JSON)"),
        json_output: bool = typer.Option(False, "--json", help="Output JSON"),
    ):
        """Feed a recorded stream through the engine and show the resulting surfaces"""
        engine = IngestionEngine(load_config(config))
        engine.consume_all(_chunks(path.read_text(encoding="utf-8"), chunk_size))

        if json_output:
            payload = {
                "mode": engine.mode.value,
                "textHistory": list(engine.text_history),
                "surfaces": {sid: s.to_dict() for sid, s in engine.surfaces.items()},
            }
            console.print_json(json.dumps(payload))
            return

        for block in engine.text_history:
            console.print(f"[dim]text:[/dim] {block}")

        if not engine.surfaces:
            console.print("[yellow]No surfaces[/yellow]")
            return

        table = Table(title="Surfaces")
        table.add_column("Surface", style="cyan", no_wrap=True)
        table.add_column("Live", style="green")
        table.add_column("Root", style="yellow")
        table.add_column("Components", style="white")
        table.add_column("Data keys", style="blue")

        for surface_id, surface in engine.surfaces.items():
            types = sorted({get_component_type(c) or "?" for c in surface.components.values()})
            table.add_row(
                surface_id,
                "yes" if surface.is_live else "no",
                surface.root or "-",
                f"{len(surface.components)} ({', '.join(types)})" if types else "0",
                ", ".join(surface.data) or "-",
            )

        console.print(table)

    @app.command("validate")
    def validate(
        path: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSONL body to validate"),
    ):
        """Validate an A2UI JSONL body"""
        ok, errors = validate_jsonl(path.read_text(encoding="utf-8"))
        if ok:
            console.print("[green]✓[/green] Valid A2UI JSONL")
            return

        for error in errors:
            console.print(f"[red]✗[/red] {error}")
        raise typer.Exit(1)
