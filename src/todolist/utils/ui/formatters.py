"""Output formatters for the todolist CLI."""

from __future__ import annotations

import json
from typing import Any

import yaml
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from todolist.models import Priority
from todolist.services.view_model import TaskListViewModel, TaskRow
from todolist.utils.ui.console import get_console

console = get_console()

OUTPUT_FORMATS = ("table", "json", "yaml")

PRIORITY_STYLES = {
    Priority.HIGH: "bold red",
    Priority.MEDIUM: "yellow",
    Priority.LOW: "green",
}


def format_output(data: Any, output_format: str = "table") -> None:
    """Format and display output based on format."""
    if output_format == "json":
        print(json.dumps(data, indent=2, default=str, ensure_ascii=False))
    elif output_format == "yaml":
        print(yaml.dump(data, default_flow_style=False, sort_keys=False))
    elif isinstance(data, dict):
        format_single_item(data)
    elif isinstance(data, list) and data and isinstance(data[0], dict):
        format_dict_table(data)
    else:
        for item in data or []:
            console.print(item, markup=False)


def format_dict_table(items: list[dict]) -> None:
    """Format a list of dictionaries as a table."""
    if not items:
        console.print("[yellow]No items found[/yellow]")
        return

    columns = list(items[0].keys())
    table = Table(show_header=True, header_style="bold magenta")
    for col in columns:
        table.add_column(col.replace("_", " ").title())

    for item in items:
        table.add_row(*(Text(_cell(item.get(col))) for col in columns))

    console.print(table)


def format_single_item(item: dict) -> None:
    """Format a single item as key-value pairs."""
    table = Table(show_header=False, box=None)
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="white")

    for key, value in item.items():
        table.add_row(key.replace("_", " ").title(), Text(_cell(value)))

    console.print(table)


def _cell(value: Any) -> str:
    if isinstance(value, bool):
        return "✓" if value else "✗"
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    if value is None or value == "":
        return "-"
    return str(value)


def _task_text(row: TaskRow) -> Text:
    task = row.task
    text = Text(task.text, style="dim strike" if task.completed else "")
    if row.editing and row.draft is not None:
        text.append(f"  (editing: {row.draft})", style="italic cyan")
    return text


def _due_text(row: TaskRow) -> Text:
    if row.task.due_date is None:
        return Text("-", style="dim")
    label = row.task.due_date.isoformat()
    if row.overdue:
        return Text(f"{label} (overdue)", style="bold red")
    return Text(label)


def format_task_list(view: TaskListViewModel) -> None:
    """Render a task list view model as a rich table with a footer."""
    state = view.state
    header = Text.assemble(
        (
            f"All ({view.total_count})  Active ({view.active_count})  "
            f"Completed ({view.completed_count})",
            "bold",
        ),
        (f"  filter={state.filter.value} sort={state.sort_by.value}", "dim"),
    )
    if state.search:
        header.append(f" search={state.search!r}", style="dim")
    console.print(header)

    if view.tags:
        tags = Text.assemble(("Tags: ", "magenta"), "  ".join(f"#{tag}" for tag in view.tags))
        console.print(tags)

    if not view.rows:
        console.print(Text(f"\n✓ {view.empty_message}\n", style="dim"))
    else:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="cyan", no_wrap=True)
        table.add_column("", no_wrap=True)
        table.add_column("Task")
        table.add_column("Priority", no_wrap=True)
        table.add_column("Due", no_wrap=True)
        table.add_column("Tag")

        for row in view.rows:
            task = row.task
            table.add_row(
                str(task.id),
                "[green]✓[/green]" if task.completed else "○",
                _task_text(row),
                Text(task.priority.value, style=PRIORITY_STYLES[task.priority]),
                _due_text(row),
                Text(f"#{task.tag}") if task.tag else "",
                style="on grey23" if row.selected else None,
            )
        console.print(table)

    if view.selected_count:
        console.print(f"[purple]{view.selected_count} selected[/purple]")
    console.print(f"[dim]{view.remaining_summary}[/dim]")


def format_error(message: str) -> None:
    """Format and display an error message."""
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    console.print(f"[bold green]Success:[/bold green] {escape(message)}")


def format_warning(message: str) -> None:
    """Format and display a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {escape(message)}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    console.print(f"[bold blue]Info:[/bold blue] {escape(message)}")
