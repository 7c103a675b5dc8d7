"""Command-line interface for the Belmont recruitment service."""

import asyncio
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from belmont_recruitment.config import Settings, get_settings

app = typer.Typer(
    name="belmont-recruitment",
    help="Belmont recruitment - website applications reviewed by staff on Discord",
    add_completion=False,
)
console = Console()


def _load_settings() -> Settings:
    """Load settings or exit with the list of missing/invalid variables."""
    try:
        return get_settings()
    except ValidationError as e:
        console.print("❌ Invalid configuration:")
        for error in e.errors():
            name = ".".join(str(part) for part in error["loc"]).upper()
            console.print(f"   {name}: {error['msg']}")
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Host to bind to"),
    port: Optional[int] = typer.Option(None, help="Port to bind to"),
) -> None:
    """Start the API server and the Discord bot."""
    from belmont_recruitment.runtime import run_service
    from belmont_recruitment.utils.logging import configure_logging

    settings = _load_settings()
    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(settings)
    console.print(f"🚀 Starting Belmont recruitment on {settings.host}:{settings.port}")
    try:
        asyncio.run(run_service(settings))
    except KeyboardInterrupt:
        console.print("Stopped.")


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = _load_settings()

    table = Table(title="Belmont Recruitment Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Discord Token", "***")
    table.add_row("Guild", str(settings.guild_id))
    table.add_row("Application Channel", str(settings.application_channel_id))
    table.add_row("Staff Role", str(settings.staff_role_id))
    table.add_row("Tickets Channel", str(settings.tickets_channel_id))
    table.add_row("Shared Secret", "configured" if settings.shared_secret else "disabled")
    table.add_row("Listen", f"{settings.host}:{settings.port}")
    table.add_row("Organization", settings.organization_name)
    table.add_row("Single Decision Guard", str(settings.single_decision_guard))
    table.add_row("Log Level", settings.log_level)

    console.print(table)


@app.command()
def check() -> None:
    """Verify the configuration can be loaded."""
    console.print("🔍 Checking configuration...")
    settings = _load_settings()
    console.print("✅ Required settings present")
    if not settings.shared_secret:
        console.print("⚠️  API_SECRET not set: /apply accepts unauthenticated submissions")


if __name__ == "__main__":
    app()
