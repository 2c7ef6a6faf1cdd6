"""CLI commands for running scripts locally."""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax

script_app = typer.Typer(help="Script commands")
console = Console()


@script_app.command("run")
def run_script(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Script file"),
    params: str = typer.Option("{}", "--params", "-p", help="Parameters as a JSON object"),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Budget in seconds (default: SCRIPT_TIMEOUT_SECONDS)"
    ),
    show_source: bool = typer.Option(False, "--show-source", help="Print the script first"),
):
    """Run a script file through the sandbox, exactly as run_script would."""
    from superpowers.config import get_settings
    from superpowers.core.exception import ScriptError
    from superpowers.sandbox import ERROR_PREFIX, ScriptSandbox, parse_script_params

    settings = get_settings()
    source = file.read_text(encoding="utf-8")

    if show_source:
        console.print(Syntax(source, "python", line_numbers=True))

    try:
        parsed = parse_script_params(params)
    except ScriptError as e:
        console.print(f"[red]{ERROR_PREFIX}{e}[/red]")
        raise typer.Exit(1)

    sandbox = ScriptSandbox(
        timeout=timeout or settings.script_timeout_seconds,
        startup_timeout=settings.script_startup_timeout_seconds,
        start_method=settings.sandbox_start_method,
    )

    try:
        result = sandbox.execute(source, parsed, script_name=file.stem)
    except ScriptError as e:
        console.print(Panel(f"{ERROR_PREFIX}{e}", title=file.name, border_style="red"))
        raise typer.Exit(1)

    console.print(
        Panel(
            Syntax(json.dumps(json.loads(result), indent=2), "json"),
            title=file.name,
            border_style="green",
        )
    )
