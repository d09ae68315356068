"""
Aplicación CLI (tfutil).

Solo compone comandos; la lógica vive en core, providers y la sesión del host.
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from tfutil import __version__
from tfutil.core.diagnostics import Diagnostic
from tfutil.core.errors import UtilError
from tfutil.core.runtime.state import JsonStateStore
from tfutil.host.config import SessionConfig, load_config
from tfutil.host.session import ApplyReport, PlannedChange, ProviderSession
from tfutil.providers.util.provider import UtilProvider

DEFAULT_CONFIG = Path("tfutil.yaml")
DEFAULT_STATE = Path("tfutil.state.json")

app = typer.Typer(
    name="tfutil",
    help="tfutil - Provider util: recursos indestructibles para proteger subgrafos",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()

ACTION_STYLES = {
    "create": "[green]+ create[/green]",
    "update": "[yellow]~ update[/yellow]",
    "replace": "[magenta]-/+ replace[/magenta]",
    "delete": "[red]- destroy[/red]",
    "noop": "[dim]  noop[/dim]",
}


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Muestra trazas de depuración"),
    env_file: Path = typer.Option(Path(".env"), "--env-file", help="Archivo .env a cargar"),
):
    """Carga .env y configura logging antes de cualquier comando"""
    if env_file.exists():
        load_dotenv(env_file)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def print_diagnostics(diagnostics: Iterable[Diagnostic], address: Optional[str] = None) -> None:
    """Muestra diagnósticos: rojo para errores, amarillo para advertencias"""
    for diag in diagnostics:
        style = "red" if diag.is_error else "yellow"
        label = "Error" if diag.is_error else "Warning"
        title = f"{label}: {diag.summary}"
        if address:
            title += f" ({address})"
        console.print(Panel(diag.detail or diag.summary, title=f"[bold {style}]{title}[/bold {style}]",
                            border_style=style, title_align="left"))


def _open_session(config_path: Path, state_path: Path) -> Tuple[ProviderSession, SessionConfig]:
    try:
        cfg = load_config(config_path)
        store = JsonStateStore(state_path)
    except UtilError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    session = ProviderSession(UtilProvider(__version__), store)
    diagnostics = session.configure(cfg.provider)
    print_diagnostics(diagnostics)
    if diagnostics.has_error():
        raise typer.Exit(1)
    return session, cfg


def _display_plan(changes: List[PlannedChange]) -> None:
    table = Table(title="Plan", show_header=True, header_style="bold cyan")
    table.add_column("Recurso", style="cyan")
    table.add_column("Acción")
    table.add_column("Cambios", style="yellow")
    for change in changes:
        fields = []
        for diff in change.result.diffs:
            marker = " [magenta](fuerza reemplazo)[/magenta]" if diff.field in change.result.requires_replace else ""
            fields.append(f"{diff.field}: {json.dumps(diff.actual)} → {json.dumps(diff.desired)}{marker}")
        table.add_row(change.address, ACTION_STYLES.get(change.action, change.action), "\n".join(fields))
    console.print(table)
    for change in changes:
        print_diagnostics(change.result.diagnostics, change.address)


def _finish(report: ApplyReport, verb: str) -> None:
    for outcome in report.outcomes:
        print_diagnostics(outcome.diagnostics, outcome.address)
        if outcome.applied:
            console.print(f"  [green]✓[/green] {outcome.address}: {outcome.action}")
    if report.has_error():
        console.print(f"[red]✘ {verb} terminó con errores[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✅ {verb} completado[/green]")


@app.command()
def version():
    """Muestra la versión de tfutil"""
    console.print(Panel.fit(
        "[bold cyan]tfutil[/bold cyan]\n"
        "[dim]Provider util - recursos indestructibles[/dim]\n\n"
        f"[bold]Versión:[/bold] {__version__}",
        border_style="cyan"
    ))


@app.command()
def schema(
    as_json: bool = typer.Option(False, "--json", help="Salida en JSON"),
):
    """Muestra el schema del provider y de sus recursos"""
    provider = UtilProvider(__version__)
    prefix = provider.metadata()["type_name"]
    schemas = {"provider": provider.schema().to_dict(), "resources": {}}
    for factory in provider.resources():
        resource = factory()
        schemas["resources"][resource.metadata(prefix)] = resource.schema().to_dict()

    if as_json:
        typer.echo(json.dumps(schemas, indent=2))
        return

    for name, data in [("provider " + prefix, schemas["provider"])] + list(schemas["resources"].items()):
        table = Table(title=name, show_header=True, header_style="bold cyan")
        table.add_column("Atributo", style="cyan")
        table.add_column("Tipo", style="green")
        table.add_column("Default")
        table.add_column("Descripción", style="dim")
        for attr_name, attr in data["attributes"].items():
            table.add_row(attr_name, attr["type"], json.dumps(attr.get("default")), attr["description"])
        console.print(table)


@app.command()
def plan(
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Archivo YAML de configuración"),
    state: Path = typer.Option(DEFAULT_STATE, "--state", "-s", help="Archivo JSON de estado"),
):
    """Muestra qué cambios aplicaría apply, sin ejecutarlos"""
    session, cfg = _open_session(config, state)
    changes = session.plan(cfg.desired())
    _display_plan(changes)
    if any(c.result.diagnostics.has_error() for c in changes):
        raise typer.Exit(1)


@app.command()
def apply(
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Archivo YAML de configuración"),
    state: Path = typer.Option(DEFAULT_STATE, "--state", "-s", help="Archivo JSON de estado"),
):
    """Aplica la configuración (create, update o replace)"""
    session, cfg = _open_session(config, state)
    _finish(session.apply(cfg.desired()), "Apply")


@app.command()
def destroy(
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Archivo YAML de configuración"),
    state: Path = typer.Option(DEFAULT_STATE, "--state", "-s", help="Archivo JSON de estado"),
    target: Optional[List[str]] = typer.Option(None, "--target", "-t", help="Dirección a destruir (repetible)"),
):
    """Destruye recursos del estado (pasando por la protección de destrucción)"""
    session, _ = _open_session(config, state)
    _finish(session.destroy(target or None), "Destroy")


@app.command()
def refresh(
    config: Path = typer.Option(DEFAULT_CONFIG, "--config", "-c", help="Archivo YAML de configuración"),
    state: Path = typer.Option(DEFAULT_STATE, "--state", "-s", help="Archivo JSON de estado"),
):
    """Ejecuta Read sobre cada recurso persistido"""
    session, _ = _open_session(config, state)
    diagnostics = session.refresh()
    print_diagnostics(diagnostics)
    if diagnostics.has_error():
        raise typer.Exit(1)
    console.print("[green]✅ Estado actualizado[/green]")


@app.command()
def show(
    state: Path = typer.Option(DEFAULT_STATE, "--state", "-s", help="Archivo JSON de estado"),
):
    """Muestra el estado persistido"""
    try:
        store = JsonStateStore(state)
    except UtilError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    addresses = store.addresses()
    if not addresses:
        console.print("[dim]El estado está vacío[/dim]")
        return

    table = Table(title=f"Estado: {state}", show_header=True, header_style="bold cyan")
    table.add_column("Recurso", style="cyan")
    table.add_column("Atributos", style="green")
    for address in addresses:
        record = store.get(address)
        table.add_row(address, json.dumps(record["attributes"], indent=2, sort_keys=True))
    console.print(table)


def main():
    app()
