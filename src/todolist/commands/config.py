"""Configuration management commands."""

import typer

from todolist.services.config_service import get_config_service
from todolist.utils import exit_codes
from todolist.utils.logger import log_file_path
from todolist.utils.ui.console import get_console
from todolist.utils.ui.formatters import format_output, format_success

from .decorators import AppError, command_wrapper

app = typer.Typer(help="Configuration management commands")
console = get_console()


@app.command("view")
@command_wrapper
def view_config(
    output: str = typer.Option("yaml", "--output", "-o", help="Output format"),
) -> None:
    """View current configuration."""
    config_svc = get_config_service()
    format_output(config_svc.config.model_dump(mode="json"), output)


@app.command("get")
@command_wrapper
def get_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ui.timezone)"),
) -> None:
    """Get a configuration value."""
    value = get_config_service().get_value(key)
    if hasattr(value, "model_dump"):
        format_output(value.model_dump(mode="json"), "yaml")
    else:
        shown = "-" if value is None else str(getattr(value, "value", value))
        console.print(shown, markup=False)


@app.command("set")
@command_wrapper
def set_config(
    key: str = typer.Argument(..., help="Configuration key (e.g., ui.timezone)"),
    value: str = typer.Argument(..., help="Configuration value"),
) -> None:
    """Set a configuration value."""
    get_config_service().set_value(key, value)
    format_success(f"Configuration '{key}' set to '{value}'")


@app.command("reset")
@command_wrapper
def reset_config(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Reset configuration to defaults."""
    if not yes and not typer.confirm("Reset configuration to defaults?"):
        raise AppError("Aborted", exit_codes.ERROR_GENERAL)
    get_config_service().reset_config()
    format_success("Configuration reset to defaults")


@app.command("path")
@command_wrapper
def show_paths() -> None:
    """Show where configuration, tasks and the log file live."""
    config_svc = get_config_service()
    for label, path in (
        ("config", config_svc.config_path),
        ("tasks", config_svc.tasks_path()),
        ("log", log_file_path()),
    ):
        console.print(f"{label + ':':<8}{path}", markup=False, soft_wrap=True)
