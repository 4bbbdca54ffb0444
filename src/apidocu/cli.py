from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from apidocu.config import Settings, configure_logging
from apidocu.domain.models import EndpointRule
from apidocu.registry.resolver import resolve_rule
from apidocu.registry.snapshot import Snapshot, SnapshotError, load_snapshot
from apidocu.render.formats import encode_document, render_document


app = typer.Typer(no_args_is_help=True, add_completion=False)

console = Console()
err_console = Console(stderr=True)


def _load(snapshot: str) -> Snapshot:
    path = Path(snapshot).expanduser().resolve()
    if not path.is_file():
        raise typer.BadParameter(f"Snapshot file does not exist: {path}")
    try:
        return load_snapshot(path)
    except SnapshotError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(None, help="Log level (default: $APIDOCU_LOG_LEVEL or INFO)"),
) -> None:
    settings = Settings.from_env()
    configure_logging(log_level or settings.log_level)


@app.command("render")
def render_cmd(
    snapshot: str = typer.Argument(..., help="Path to a registry snapshot (JSON)"),
    output_type: Optional[str] = typer.Option(None, "--type", help="Output type: rst|pdf|md"),
    component: Optional[str] = typer.Option(None, help="Component name used as document title"),
    as_base64: bool = typer.Option(False, "--base64", help="Emit the base64 payload instead of text"),
    out: Optional[str] = typer.Option(None, help="Output path (default: print to stdout)"),
) -> None:
    settings = Settings.from_env()
    snap = _load(snapshot)

    output_type = output_type or settings.default_output_type
    component_name = component or snap.component or settings.component_name

    unresolved: list[EndpointRule] = []
    text = render_document(
        output_type,
        component_name,
        snap.registry,
        snap.resolver,
        unresolved=unresolved,
    )
    payload = encode_document(text) if as_base64 else text

    if out:
        out_path = Path(out).expanduser()
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(payload, encoding="utf-8")
        err_console.print(f"[bold green]Wrote[/bold green] {output_type} documentation to: {out_path}")
    else:
        # plain write; rich markup would mangle RST
        typer.echo(payload, nl=False)

    for rule in unresolved:
        err_console.print(
            f"[yellow]unresolved[/yellow] {rule.method.value:<6} {rule.path} -> {rule.handler_name}"
        )


@app.command()
def endpoints(
    snapshot: str = typer.Argument(..., help="Path to a registry snapshot (JSON)"),
) -> None:
    snap = _load(snapshot)

    console.print(f"[bold]Endpoints:[/bold] {len(snap.registry)}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("METHOD", no_wrap=True)
    table.add_column("PATH")
    table.add_column("KIND", no_wrap=True)
    table.add_column("HANDLER")
    table.add_column("RESOLVED", no_wrap=True)

    for rule in snap.registry.iter_rules():
        handler = f"{rule.group_name}/{rule.handler_name}" if rule.group_name else rule.handler_name
        resolved = resolve_rule(snap.resolver, rule) is not None
        table.add_row(
            rule.method.value,
            rule.path,
            rule.handler.kind,
            handler,
            "yes" if resolved else "[red]no[/red]",
        )

    console.print(table)


@app.command()
def ping() -> None:
    console.print("pong")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
