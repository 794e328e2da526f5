from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

import json
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from apidesc.domain.models import CommandSpec
from apidesc.extractors.annotations.parser import RegexAnnotationParser
from apidesc.orchestrator.pipeline import load_description, parse_assignments, run_validate
from apidesc.registry.cache import CommandCache
from apidesc.settings import ApidescSettings


app = typer.Typer(no_args_is_help=True, add_completion=False)

commands_app = typer.Typer(no_args_is_help=True)
app.add_typer(commands_app, name="commands")

console = Console()

# unknown names and malformed descriptions or handlers
_INPUT_ERRORS = (LookupError, ValueError, ValidationError)


@app.callback()
def _configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    settings = ApidescSettings()
    level = logging.DEBUG if verbose else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _check_file(description: str) -> Path:
    path = Path(description).expanduser().resolve()
    if not path.exists():
        raise typer.BadParameter(f"Description file does not exist: {path}")
    if not path.is_file():
        raise typer.BadParameter(f"Description path is not a file: {path}")
    return path


def _check_format(format: str) -> str:
    fmt = format.lower().strip()
    if fmt not in ("table", "json"):
        raise typer.BadParameter("format must be one of: table, json")
    return fmt


def _command_payload(command: CommandSpec) -> dict[str, Any]:
    return {
        **command.to_dict(),
        "params": {name: p.model_dump() for name, p in command.params.items()},
    }


def _print_command(command: CommandSpec) -> None:
    console.print(f"[bold]Command:[/bold] {command.name or '-'}")
    console.print(f"[bold]Method:[/bold] {command.method or '-'}")
    console.print(f"[bold]URI:[/bold] {escape(command.uri) or '-'}")
    console.print(f"[bold]Class:[/bold] {command.handler_class}")
    if command.doc:
        console.print(f"[bold]Doc:[/bold] {escape(command.doc)}")

    if not command.params:
        console.print("No parameters.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("PARAM", no_wrap=True)
    table.add_column("TYPE", no_wrap=True)
    table.add_column("REQ", no_wrap=True)
    table.add_column("DEFAULT")
    table.add_column("LENGTH", no_wrap=True)
    table.add_column("LOCATION", no_wrap=True)
    table.add_column("DOC")

    for name, p in command.params.items():
        type_label = p.type or ""
        if p.type_args:
            type_label += ":" + ",".join(str(a) for a in p.type_args)
        length = ""
        if p.min_length or p.max_length:
            length = f"{p.min_length or ''}..{p.max_length or ''}"
        table.add_row(
            name,
            escape(type_label),
            "yes" if p.required else "",
            "" if p.default is None else escape(str(p.default)),
            length,
            p.location or "",
            escape(p.doc),
        )

    console.print(table)


@commands_app.command("list")
def commands_list(
    description: str = typer.Argument(..., help="Path to a .json/.yaml service description"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    path = _check_file(description)
    fmt = _check_format(format)
    try:
        desc = load_description(path)
    except _INPUT_ERRORS as exc:
        raise typer.BadParameter(str(exc)) from exc

    if fmt == "json":
        payload = [_command_payload(c) for c in desc.commands]
        console.print(json.dumps(payload, indent=2, default=str), markup=False, soft_wrap=True)
        return

    console.print(f"[bold]Description:[/bold] {desc.name or path.name}")
    console.print(f"[bold]Commands:[/bold] {len(desc)}")

    table = Table(show_header=True, header_style="bold")
    table.add_column("NAME", no_wrap=True)
    table.add_column("METHOD", no_wrap=True)
    table.add_column("URI")
    table.add_column("PARAMS", no_wrap=True)
    table.add_column("CLASS")

    for c in desc.commands:
        table.add_row(escape(c.name), c.method, escape(c.uri), str(len(c.params)), escape(c.handler_class))

    console.print(table)


@commands_app.command("show")
def commands_show(
    description: str = typer.Argument(..., help="Path to a .json/.yaml service description"),
    name: str = typer.Argument(..., help="Command name"),
) -> None:
    path = _check_file(description)
    try:
        command = load_description(path).get_command(name)
    except _INPUT_ERRORS as exc:
        raise typer.BadParameter(str(exc)) from exc
    _print_command(command)


@app.command()
def validate(
    description: str = typer.Argument(..., help="Path to a .json/.yaml service description"),
    name: str = typer.Argument(..., help="Command name"),
    set_: Optional[List[str]] = typer.Option(None, "--set", "-s", help="Argument as key=value (repeatable)"),
    type_validation: bool = typer.Option(True, help="Check declared parameter types"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    path = _check_file(description)
    fmt = _check_format(format)

    try:
        values = parse_assignments(set_ or [])
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    settings = ApidescSettings()
    if not type_validation:
        settings = settings.model_copy(update={"type_validation": False})

    try:
        result = run_validate(path, name, values, settings=settings)
    except _INPUT_ERRORS as exc:
        raise typer.BadParameter(str(exc)) from exc

    if fmt == "json":
        payload = {
            "command": result.command.name,
            "ok": result.ok,
            "config": result.config,
            "errors": result.errors,
        }
        console.print(json.dumps(payload, indent=2, default=str), markup=False, soft_wrap=True)
    else:
        if result.ok:
            console.print(f"[bold green]OK[/bold green] {result.command.name}")
        else:
            console.print(f"[bold red]Invalid[/bold red] {result.command.name}: {len(result.errors)} error(s)")
            for err in result.errors:
                console.print(f"  - {escape(err)}")

        table = Table(show_header=True, header_style="bold")
        table.add_column("KEY", no_wrap=True)
        table.add_column("VALUE")
        for key, value in result.config.items():
            table.add_row(escape(key), "" if value is None else escape(str(value)))
        console.print(table)

    if not result.ok:
        raise typer.Exit(code=1)


@app.command()
def derive(
    handler: str = typer.Argument(..., help="Handler class as pkg.module:Class or pkg.module.Class"),
    format: str = typer.Option("table", help="Output format: table|json"),
) -> None:
    fmt = _check_format(format)
    settings = ApidescSettings()
    cache = CommandCache(parser=RegexAnnotationParser(settings.annotation_marker))

    try:
        command = cache.get_or_derive(handler)
    except _INPUT_ERRORS as exc:
        raise typer.BadParameter(str(exc)) from exc

    if fmt == "json":
        console.print(json.dumps(_command_payload(command), indent=2, default=str), markup=False, soft_wrap=True)
        return
    _print_command(command)


@app.command()
def ping() -> None:
    console.print("pong")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
