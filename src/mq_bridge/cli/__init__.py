from __future__ import annotations

import json
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, dump_config
from ..core import BridgeService
from ..detection import EXTENSION_MAP, detect_input_format
from ..engines import EngineRegistry, create_default_registry
from ..errors import BridgeError
from ..logging import read_log
from ..options import ConversionOptions, InputFormat, QueryOptions
from ..settings import Settings, get_settings, prepare_config
from ..utils import atomic_write

console = Console()
err_console = Console(stderr=True)

app = typer.Typer(help="Run markdown queries and convert HTML to Markdown")


def _load_config(path: Path | None) -> AppConfig:
    if path is None:
        return prepare_config(get_settings())
    return prepare_config(Settings(config_path=path, engine=get_settings().engine))


def _build_registry(engine_module: str | None) -> EngineRegistry:
    registry = create_default_registry()
    if engine_module:
        registry.load_module(engine_module)
    return registry


def _read_content(file: Path | None) -> str:
    if file is None:
        return sys.stdin.read()
    return file.read_text(encoding="utf-8")


def _fail(exc: BridgeError) -> typer.Exit:
    err_console.print(f"[red]Failed[/red]: {exc.code} - {exc}")
    return typer.Exit(1)


@app.command()
def run(
    code: str = typer.Argument(..., help="Query to evaluate"),
    file: Path | None = typer.Argument(None, help="Input file; stdin when omitted"),
    input_format: InputFormat | None = typer.Option(None, "--format", "-f", help="Input format"),
    engine: str | None = typer.Option(None, "--engine", help="Registered engine name"),
    engine_module: str | None = typer.Option(None, "--engine-module", help="Module registering engines"),
    as_json: bool = typer.Option(False, "--json", help="Print values and text as JSON"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    if engine:
        cfg.runtime.default_engine = engine
    try:
        service = BridgeService(cfg, registry=_build_registry(engine_module))
        content = _read_content(file)
        if input_format is None:
            input_format = detect_input_format(file) if file is not None else cfg.runtime.default_input_format
        result = service.run(code, content, QueryOptions(input_format=input_format))
    except BridgeError as exc:
        raise _fail(exc) from exc
    if as_json:
        console.print_json(json.dumps(result.to_payload(), ensure_ascii=False))
    elif result.text:
        console.print(result.text, markup=False, highlight=False, soft_wrap=True)


@app.command("html-to-markdown")
def html_to_markdown(
    file: Path | None = typer.Argument(None, help="HTML file; stdin when omitted"),
    extract_scripts: bool = typer.Option(
        False, "--extract-scripts", help="Render inline scripts as fenced code blocks"
    ),
    front_matter: bool = typer.Option(False, "--front-matter", help="Prepend YAML front matter"),
    title_as_h1: bool = typer.Option(False, "--title-as-h1", help="Prepend the document title as a heading"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write Markdown to this file"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    service = BridgeService(cfg)
    options = ConversionOptions(
        extract_scripts_as_code_blocks=extract_scripts,
        generate_front_matter=front_matter,
        use_title_as_h1=title_as_h1,
    )
    try:
        markdown = service.html_to_markdown(_read_content(file), options)
    except BridgeError as exc:
        raise _fail(exc) from exc
    if output is not None:
        atomic_write(output, markdown)
        console.print(f"[green]Success[/green]: wrote {output}")
        return
    console.print(markdown, markup=False, highlight=False, soft_wrap=True)


@app.command()
def formats() -> None:
    table = Table(title="Input formats")
    table.add_column("Format")
    table.add_column("Extensions")
    for fmt in InputFormat:
        extensions = [ext for ext, mapped in EXTENSION_MAP.items() if mapped is fmt]
        table.add_row(fmt.value, ", ".join(extensions) or "-")
    console.print(table)


@app.command()
def engines(
    engine_module: str | None = typer.Option(None, "--engine-module", help="Module registering engines"),
) -> None:
    try:
        names = _build_registry(engine_module).names()
    except BridgeError as exc:
        raise _fail(exc) from exc
    if not names:
        console.print("No engines registered.")
        return
    for name in names:
        console.print(name)


@app.command("show-config")
def show_config(
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    console.print_json(dump_config(_load_config(config)))


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", min=1, help="Number of entries to show"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    if cfg.runtime.log_file is None:
        console.print("Invocation log is disabled.")
        raise typer.Exit()
    entries = read_log(cfg.runtime.log_file)[-limit:]
    table = Table(title="Recent invocations")
    table.add_column("Run ID")
    table.add_column("Operation")
    table.add_column("Format")
    table.add_column("Status")
    table.add_column("Error")
    for entry in entries:
        table.add_row(
            str(entry.get("run_id")),
            str(entry.get("operation")),
            str(entry.get("input_format") or "-"),
            str(entry.get("status")),
            str(entry.get("error_code") or "-"),
        )
    console.print(table)


if __name__ == "__main__":
    app()
