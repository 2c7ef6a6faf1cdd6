"""Superpowers CLI application."""

import typer

from superpowers.cli.script_commands import script_app
from superpowers.cli.seed_commands import seed

app = typer.Typer(
    name="superpowers",
    help="Superpowers - agents built from reusable skills, scripts and tools",
    no_args_is_help=True,
)

app.add_typer(script_app, name="script", help="Run scripts through the sandbox")
app.command()(seed)


@app.command()
def version():
    """Show version information."""
    from superpowers.config import get_settings

    settings = get_settings()
    typer.echo(f"Superpowers v{settings.app_version}")


@app.command()
def info():
    """Show application information."""
    from superpowers.config import get_settings

    settings = get_settings()

    typer.echo(f"Application: Superpowers v{settings.app_version}")
    typer.echo(f"Environment: {settings.env}")
    typer.echo(f"LLM Provider: {settings.llm_provider}")
    typer.echo(f"Embeddings: {settings.embedding_provider}")
    typer.echo(f"Script timeout: {settings.script_timeout_seconds:g}s")
    typer.echo(f"Basic auth: {'enabled' if settings.auth_enabled else 'disabled'}")


if __name__ == "__main__":
    app()
