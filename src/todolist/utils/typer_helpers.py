"""Typer customisations shared by the command groups."""

from difflib import get_close_matches

import click
import typer
from rich.markup import escape
from typer.core import TyperGroup

from todolist.utils import exit_codes
from todolist.utils.ui.console import get_console


def suggest_commands(attempted: str, commands: list[str]) -> list[str]:
    """Up to three command names that look like *attempted*."""
    return get_close_matches(attempted, commands, n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Group that answers a mistyped command with the closest real ones."""

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            suggestions = suggest_commands(args[0], list(self.commands)) if args else []
            if not suggestions:
                raise
            console = get_console()
            console.print(
                f'[red]Error:[/red] no such command "{escape(args[0])}" in "{ctx.info_name}"'
            )
            console.print("[yellow]Did you mean:[/yellow]")
            for name in suggestions:
                console.print(f"    {name}")
            raise typer.Exit(exit_codes.ERROR_INVALID_ARGS) from e
