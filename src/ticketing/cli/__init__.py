"""Main CLI application module."""

from pathlib import Path

import typer

from src.ticketing.entities import ENTITY_KINDS
from src.ticketing.runtime.config.config_data import ConfigData
from src.ticketing.runtime.config.config_template import load_config_file
from src.ticketing.runtime.context import get_config, merge_configs
from src.ticketing.runtime.settings import EnvironmentVariables
from src.ticketing.utils.app_startup import configure_logging

from .booking_commands import build_kind_app
from .menu_commands import menu
from .utils import CliState, console

# Create the main CLI application
app = typer.Typer(
    help="🎫 Ticketing CLI - book seats on trains and vehicles",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Path to config.yaml (defaults to TICKETING_CONFIG_FILE)"
    ),
    data_dir: Path | None = typer.Option(
        None, "--data-dir", help="Directory holding the record files"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Logging level (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL).",
    ),
) -> None:
    """Resolve configuration and logging for every subcommand."""
    try:
        config = load_config_file(config_file) if config_file else get_config()
    except (ValueError, OSError) as e:
        console.print(f"[red]❌ Failed to load configuration: {e}[/red]")
        raise typer.Exit(code=1) from e

    if data_dir is not None:
        override = ConfigData()
        override.storage.data_dir = str(data_dir)
        config = merge_configs(config, override)

    configure_logging(config, level=log_level or EnvironmentVariables().log_level)
    ctx.obj = CliState(config=config)


# Register command groups
for _kind in ENTITY_KINDS.values():
    app.add_typer(build_kind_app(_kind), name=_kind.name)

app.command("menu")(menu)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
