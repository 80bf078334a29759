"""Main entry point for the todolist CLI."""

import typer

from todolist import __version__
from todolist.commands import config, tasks
from todolist.exceptions import ConfigError
from todolist.services.config_service import get_config_service
from todolist.utils import exit_codes
from todolist.utils.logger import set_log_level
from todolist.utils.typer_helpers import SuggestingGroup
from todolist.utils.ui.console import get_console
from todolist.utils.ui.formatters import format_error

app = typer.Typer(
    name="todolist",
    cls=SuggestingGroup,
    help="Keep a personal task list from the command line",
    no_args_is_help=True,
)

console = get_console()

app.add_typer(tasks.app, name="tasks", help="Task management commands")
app.add_typer(config.app, name="config", help="Configuration management")


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
) -> None:
    """Keep a personal task list from the command line."""
    if verbose:
        set_log_level("DEBUG")
        return
    try:
        set_log_level(get_config_service().config.logging.level)
    except ConfigError as e:
        format_error(str(e))
        raise typer.Exit(code=exit_codes.ERROR_INVALID_ARGS) from e


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]todolist[/bold] version [cyan]{__version__}[/cyan]")


# Top-level shortcuts for the everyday commands
app.command("add")(tasks.add_task)
app.command("list")(tasks.list_tasks)
app.command("toggle")(tasks.toggle_task)


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
