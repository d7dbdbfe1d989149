"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import Settings, SettingsError, load_settings
from ..ui.config import LogLevel

# Create Typer app
app = typer.Typer(
    name="chatterm",
    help="Chat with a language model in your terminal",
    add_completion=True,
)

# Console for rich output
console = Console()


def _load(config: Path | None) -> Settings:
    try:
        return load_settings(config)
    except SettingsError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(code=1)


def mask_secret(value: str) -> str:
    """Hide all but the last four characters of a secret."""
    if not value:
        return "(not set)"
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML config file"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level: debug, info, warning, error"
    ),
):
    """Start an interactive chat session."""
    ctx.obj = config
    if ctx.invoked_subcommand is not None:
        return

    if log_level is not None and log_level.lower() not in LogLevel.choices():
        console.print(f"[red]Error: invalid log level '{log_level}'[/red]")
        raise typer.Exit(code=1)

    settings = _load(config)

    from ..ui import run_chat_app

    try:
        asyncio.run(run_chat_app(settings, log_level=log_level))
    except KeyboardInterrupt:
        pass
    except Exception as e:
        console.print(f"[red]Error running program: {e}[/red]")
        raise typer.Exit(code=1)


@app.command("settings")
def show_settings(ctx: typer.Context):
    """Show the effective settings."""
    settings = _load(ctx.obj)

    table = Table(title="Settings", show_header=True, header_style="bold cyan")
    table.add_column("Key", style="dim")
    table.add_column("Value")

    for section_name in ("llm", "ui", "storage"):
        section = getattr(settings, section_name)
        for key, value in section.model_dump(mode="json").items():
            if key == "api_key":
                value = mask_secret(value)
            table.add_row(f"{section_name}.{key}", str(value))

    console.print(table)
