"""Task management commands.

Each command opens the task store, forwards one user intent to it and
renders the result. The store persists after every change on its own.
"""

import typer

from todolist.exceptions import AmbiguousTaskIdError
from todolist.models import Priority, SortKey, TaskFilter, ViewState, parse_due_date
from todolist.services.config_service import get_config_service
from todolist.services.task_store import TaskStore
from todolist.services.view_model import build_view_model
from todolist.utils import exit_codes
from todolist.utils.task_helpers import resolve_task_id
from todolist.utils.typer_helpers import SuggestingGroup
from todolist.utils.ui.console import get_console
from todolist.utils.ui.formatters import (
    OUTPUT_FORMATS,
    format_info,
    format_output,
    format_success,
    format_task_list,
    format_warning,
)

from .decorators import AppError, command_wrapper

app = typer.Typer(cls=SuggestingGroup, help="Task management commands")
console = get_console()


def open_store() -> TaskStore:
    """Open the task store for the configured storage and report load problems."""
    config_svc = get_config_service()
    store = TaskStore.open(
        config_svc.build_adapter(),
        timezone=config_svc.config.ui.timezone,
    )
    report = store.load_report
    if report is not None and report.error:
        format_warning(f"Saved tasks could not be read and were discarded: {report.error}")
    elif report is not None and report.skipped:
        format_warning(f"Skipped {report.skipped} unreadable task record(s)")
    return store


def _require_task(store: TaskStore, raw_id: str):
    try:
        task_id = resolve_task_id(store, raw_id)
    except AmbiguousTaskIdError as e:
        raise AppError(str(e), exit_codes.ERROR_INVALID_ARGS) from e
    if task_id is None:
        raise AppError(f"Task '{raw_id}' not found", exit_codes.ERROR_NOT_FOUND)
    return task_id


def _check_output(output: str) -> None:
    if output not in OUTPUT_FORMATS:
        raise AppError(
            f"Unknown output format '{output}' (choose from {', '.join(OUTPUT_FORMATS)})",
            exit_codes.ERROR_INVALID_ARGS,
        )


@app.command("add")
@command_wrapper
def add_task(
    text: str = typer.Argument(..., help="Task text"),
    priority: Priority = typer.Option(
        Priority.MEDIUM, "--priority", "-p", case_sensitive=False, help="Priority"
    ),
    due: str | None = typer.Option(None, "--due", "-d", help="Due date (YYYY-MM-DD)"),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Tag"),
) -> None:
    """Add a task."""
    due_date = parse_due_date(due)
    if due and due_date is None:
        raise AppError(f"Invalid due date '{due}'", exit_codes.ERROR_INVALID_ARGS)

    store = open_store()
    task = store.add_task(text, priority=priority, due_date=due_date, tag=tag)
    if task is None:
        raise AppError("Task text cannot be empty", exit_codes.ERROR_INVALID_ARGS)
    format_success(f"Added task {task.id}: {task.text}")


@app.command("list")
@command_wrapper
def list_tasks(
    task_filter: TaskFilter | None = typer.Option(
        None, "--filter", "-f", case_sensitive=False, help="Completion filter"
    ),
    search: str = typer.Option("", "--search", "-s", help="Search text and tags"),
    tag: str | None = typer.Option(None, "--tag", "-t", help="Show tasks with this tag"),
    sort_by: SortKey | None = typer.Option(
        None, "--sort", case_sensitive=False, help="Sort order"
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List tasks."""
    _check_output(output)
    ui = get_config_service().config.ui
    state = ViewState(
        filter=task_filter or ui.default_filter,
        search=tag if tag else search,
        sort_by=sort_by or ui.default_sort,
    )

    store = open_store()
    view = build_view_model(store, state)
    if output == "table":
        format_task_list(view)
    else:
        format_output([row.to_dict() for row in view.rows], output)


@app.command("toggle")
@command_wrapper
def toggle_task(
    task_id: str = typer.Argument(..., help="Task ID"),
) -> None:
    """Mark a task done, or not done again."""
    store = open_store()
    resolved = _require_task(store, task_id)
    store.toggle_task(resolved)
    task = store.get_task(resolved)
    state = "completed" if task.completed else "active"
    format_success(f"Task {task.id} is now {state}")


@app.command("delete")
@command_wrapper
def delete_tasks(
    task_ids: list[str] = typer.Argument(..., help="Task ID(s)"),
) -> None:
    """Delete one or more tasks."""
    store = open_store()
    resolved = [_require_task(store, raw) for raw in task_ids]

    if len(resolved) == 1:
        store.delete_task(resolved[0])
        format_success(f"Deleted task {resolved[0]}")
        return

    for task_id in resolved:
        if not store.is_selected(task_id):
            store.toggle_selection(task_id)
    removed = store.delete_selected()
    format_success(f"Deleted {removed} task(s)")


@app.command("edit")
@command_wrapper
def edit_task(
    task_id: str = typer.Argument(..., help="Task ID"),
    text: str = typer.Argument(..., help="New task text"),
) -> None:
    """Change the text of a task."""
    store = open_store()
    resolved = _require_task(store, task_id)
    store.start_edit(resolved)
    store.update_draft(text)
    if store.save_edit(resolved):
        format_success(f"Updated task {resolved}")
    elif not text.strip():
        format_warning("Task text cannot be empty; task left unchanged")
    else:
        format_info("Task text unchanged")


@app.command("clear-completed")
@command_wrapper
def clear_completed() -> None:
    """Delete all completed tasks."""
    store = open_store()
    removed = store.clear_completed()
    if removed:
        format_success(f"Cleared {removed} completed task(s)")
    else:
        format_info("No completed tasks to clear")


@app.command("tags")
@command_wrapper
def list_tags(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """List all tags in use."""
    _check_output(output)
    store = open_store()
    tags = store.all_tags()
    if output != "table":
        format_output(tags, output)
    elif not tags:
        console.print("[yellow]No tags yet[/yellow]")
    else:
        for tag in tags:
            console.print(f"#{tag}", markup=False)


@app.command("stats")
@command_wrapper
def show_stats(
    output: str = typer.Option("table", "--output", "-o", help="Output format"),
) -> None:
    """Show task counts."""
    _check_output(output)
    store = open_store()
    overdue = sum(
        1 for task in store.tasks if not task.completed and store.is_overdue(task.due_date)
    )
    format_output(
        {
            "total": store.total_count(),
            "active": store.active_count(),
            "completed": store.completed_count(),
            "overdue": overdue,
            "tags": len(store.all_tags()),
        },
        output,
    )
