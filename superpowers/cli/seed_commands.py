"""CLI command for seeding the database."""

import asyncio
from pathlib import Path

import typer
from rich.console import Console

console = Console()


async def _seed(data: dict):
    from superpowers.db import close_db, get_session_factory, init_db
    from superpowers.store import SqlRecordStore
    from superpowers.store.seed import seed_store

    await init_db()
    try:
        async with get_session_factory()() as db:
            result = await seed_store(SqlRecordStore(db), data)
            await db.commit()
        return result
    finally:
        await close_db()


def seed(
    file: Path | None = typer.Option(
        None, "--file", "-f", exists=True, dir_okay=False, help="YAML seed file"
    ),
):
    """Seed superpowers and agents (skipped when superpowers already exist)."""
    from superpowers.store.seed import DEFAULT_SEED, SeedError, load_seed_file

    try:
        data = load_seed_file(file) if file else DEFAULT_SEED
        result = asyncio.run(_seed(data))
    except SeedError as e:
        console.print(f"[red]Invalid seed data: {e}[/red]")
        raise typer.Exit(1)

    if result.skipped:
        console.print("[yellow]Default data already present, skipping seed.[/yellow]")
        return

    for name in result.superpowers:
        console.print(f"[green]Seeded superpower:[/green] {name}")
    for name in result.agents:
        console.print(f"[green]Seeded agent:[/green] {name}")
