"""Task store - the authoritative task collection and its derived views.

The store owns the task list, the selection set used for bulk actions and
the single in-progress edit. Every mutation builds the new collection first
and swaps it in whole, then writes the full collection through the
persistence adapter and notifies subscribers. Queries never mutate.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from datetime import UTC, date, datetime
from typing import Any

from todolist.exceptions import PersistenceError, StateDecodeError
from todolist.models import (
    EditSlot,
    LoadReport,
    Priority,
    SortKey,
    Task,
    TaskFilter,
    ViewState,
    parse_due_date,
)
from todolist.repositories import PersistenceAdapter
from todolist.services.task_codec import decode_tasks, encode_tasks
from todolist.utils import dates
from todolist.utils.id_generator import IdGenerator

logger = logging.getLogger(__name__)

TaskId = int | str
Listener = Callable[["TaskStore"], None]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _matches_filter(task: Task, task_filter: TaskFilter) -> bool:
    if task_filter is TaskFilter.ACTIVE:
        return not task.completed
    if task_filter is TaskFilter.COMPLETED:
        return task.completed
    return True


def _matches_search(task: Task, term: str) -> bool:
    if not term:
        return True
    if term in task.text.lower():
        return True
    return bool(task.tag) and term in task.tag.lower()


def _sort_tasks(tasks: Iterable[Task], sort_by: SortKey) -> list[Task]:
    # sorted() is stable, reverse=True included, so ties keep insertion order
    if sort_by is SortKey.PRIORITY:
        return sorted(tasks, key=lambda t: t.priority.rank)
    if sort_by is SortKey.DUE_DATE:
        return sorted(tasks, key=lambda t: (t.due_date is None, t.due_date or date.min))
    return sorted(tasks, key=lambda t: t.created_at, reverse=True)


class TaskView:
    """Filtered, searched and sorted projection of a task snapshot.

    The snapshot is taken when the view is created. Nothing is computed
    until the view is iterated, and every iteration recomputes from the
    snapshot, so a view can be walked any number of times.
    """

    def __init__(
        self,
        tasks: tuple[Task, ...],
        task_filter: TaskFilter = TaskFilter.ALL,
        search: str = "",
        sort_by: SortKey = SortKey.DATE,
    ):
        self._tasks = tasks
        self.filter = task_filter
        self.search = search
        self.sort_by = sort_by

    def __iter__(self) -> Iterator[Task]:
        term = self.search.lower()
        matched = (
            task
            for task in self._tasks
            if _matches_filter(task, self.filter) and _matches_search(task, term)
        )
        yield from _sort_tasks(matched, self.sort_by)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return (
            f"TaskView(filter={self.filter.value!r}, search={self.search!r}, "
            f"sort_by={self.sort_by.value!r})"
        )


class TaskStore:
    """Owns the task collection, the selection set and the edit slot.

    Args:
        adapter: Where the serialized collection is loaded from and saved to
        timezone: "local" or an IANA zone name; decides which calendar day
            counts as today for the overdue rule
        clock: Returns the current instant; injectable for tests
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        timezone: str = dates.LOCAL_TIMEZONE,
        clock: Callable[[], datetime] | None = None,
    ):
        self.adapter = adapter
        self.timezone = timezone
        self._clock = clock or _utcnow
        self._ids = IdGenerator(self._now_ms)
        self._tasks: tuple[Task, ...] = ()
        self._selection: dict[TaskId, None] = {}
        self._editing: EditSlot | None = None
        self._listeners: list[Listener] = []
        self.load_report: LoadReport | None = None

    @classmethod
    def open(
        cls,
        adapter: PersistenceAdapter,
        *,
        timezone: str = dates.LOCAL_TIMEZONE,
        clock: Callable[[], datetime] | None = None,
    ) -> TaskStore:
        """Create a store and load the persisted collection into it."""
        store = cls(adapter, timezone=timezone, clock=clock)
        store.load()
        return store

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def load(self) -> LoadReport:
        """Replace the in-memory state with the persisted collection.

        A missing payload yields an empty store. A malformed payload is
        discarded: the store starts empty and the failure is logged and
        returned in the report, never raised.
        """
        tasks: list[Task] = []
        skipped = 0
        error: str | None = None

        try:
            payload = self.adapter.load()
        except PersistenceError as e:
            logger.warning("could not read task state (key=%s): %s", self.adapter.key, e)
            payload = None
            error = str(e)

        if payload is not None:
            try:
                tasks, skipped = decode_tasks(payload, self._ids, self._now_ms)
            except StateDecodeError as e:
                logger.warning(
                    "discarding malformed task state (key=%s): %s", self.adapter.key, e
                )
                error = str(e)

        self._tasks = tuple(tasks)
        self._ids.observe(task.id for task in self._tasks)
        self._selection = {}
        self._editing = None
        self.load_report = LoadReport(loaded=len(self._tasks), skipped=skipped, error=error)
        logger.info(
            "loaded %d task(s), skipped %d record(s)", len(self._tasks), skipped
        )
        self._notify()
        return self.load_report

    def _persist(self) -> None:
        try:
            self.adapter.save(encode_tasks(self._tasks))
        except PersistenceError as e:
            logger.warning("failed to save %d task(s): %s", len(self._tasks), e)

    def _commit(self, tasks: Iterable[Task]) -> None:
        """Swap in a new collection, keep selection and edit slot consistent, persist."""
        self._tasks = tuple(tasks)
        resident = {task.id for task in self._tasks}
        self._selection = {tid: None for tid in self._selection if tid in resident}
        if self._editing is not None and self._editing.task_id not in resident:
            self._editing = None
        self._persist()
        self._notify()

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with the store after every state change.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_task(
        self,
        text: str,
        priority: Priority | str = Priority.MEDIUM,
        due_date: date | str | None = None,
        tag: str | None = None,
    ) -> Task | None:
        """Append a new task.

        Args:
            text: Task text; surrounding whitespace is trimmed
            priority: Priority level or its name
            due_date: Calendar date or ISO date string
            tag: Optional label; blank means none

        Returns:
            The created task, or None if *text* is blank (nothing changes)
        """
        cleaned = (text or "").strip()
        if not cleaned:
            logger.debug("ignoring add with blank text")
            return None

        task = Task(
            id=self._ids.next_id(),
            text=cleaned,
            priority=Priority.parse(priority),
            due_date=parse_due_date(due_date),
            tag=tag.strip() if tag and tag.strip() else None,
            created_at=self._now_ms(),
        )
        self._commit([*self._tasks, task])
        logger.info("added task %s", task.id)
        return task

    def toggle_task(self, task_id: TaskId) -> bool:
        """Flip the completion status of a task. Returns False if it is absent."""
        index = self._index_of(task_id)
        if index is None:
            return False
        task = self._tasks[index]
        updated = task.model_copy(update={"completed": not task.completed})
        self._commit(self._replace(index, updated))
        return True

    def delete_task(self, task_id: TaskId) -> bool:
        """Remove a task. Deleting an absent id is a no-op returning False."""
        if self._index_of(task_id) is None:
            return False
        self._commit(task for task in self._tasks if task.id != task_id)
        logger.info("deleted task %s", task_id)
        return True

    def delete_selected(self) -> int:
        """Remove every selected task and clear the selection.

        Returns:
            Number of tasks removed
        """
        selected = set(self._selection)
        if not selected:
            return 0
        kept = [task for task in self._tasks if task.id not in selected]
        removed = len(self._tasks) - len(kept)
        self._selection = {}
        self._commit(kept)
        logger.info("deleted %d selected task(s)", removed)
        return removed

    def clear_completed(self) -> int:
        """Remove every completed task. Returns the number removed."""
        kept = [task for task in self._tasks if not task.completed]
        removed = len(self._tasks) - len(kept)
        if removed:
            self._commit(kept)
            logger.info("cleared %d completed task(s)", removed)
        return removed

    def start_edit(self, task_id: TaskId) -> EditSlot | None:
        """Open the edit slot for a task, seeding the draft with its text."""
        task = self.get_task(task_id)
        if task is None:
            return None
        self._editing = EditSlot(task_id=task.id, draft=task.text)
        self._notify()
        return self._editing

    def update_draft(self, text: str) -> None:
        """Replace the draft text of the open edit, if any."""
        if self._editing is None:
            return
        self._editing = self._editing.model_copy(update={"draft": text})
        self._notify()

    def save_edit(self, task_id: TaskId, new_text: str | None = None) -> bool:
        """Apply an edit and close the edit slot.

        Args:
            task_id: Task being edited
            new_text: Replacement text; defaults to the current draft

        Returns:
            True if the task text changed. Blank text leaves the task as it was.
        """
        slot = self._editing
        if new_text is None and slot is not None and slot.task_id == task_id:
            new_text = slot.draft
        self._editing = None

        cleaned = (new_text or "").strip()
        index = self._index_of(task_id)
        if not cleaned or index is None or self._tasks[index].text == cleaned:
            if not cleaned:
                logger.debug("ignoring blank edit for task %s", task_id)
            self._notify()
            return False

        updated = self._tasks[index].model_copy(update={"text": cleaned})
        self._commit(self._replace(index, updated))
        return True

    def cancel_edit(self) -> None:
        self._editing = None
        self._notify()

    def toggle_selection(self, task_id: TaskId) -> bool:
        """Add or remove a task from the selection.

        Returns:
            Whether the task is selected afterwards. Absent tasks are never selected.
        """
        if task_id in self._selection:
            del self._selection[task_id]
        elif self._index_of(task_id) is not None:
            self._selection[task_id] = None
        else:
            return False
        self._notify()
        return task_id in self._selection

    def clear_selection(self) -> None:
        self._selection = {}
        self._notify()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def tasks(self) -> tuple[Task, ...]:
        """All tasks in insertion order."""
        return self._tasks

    @property
    def selected_ids(self) -> tuple[TaskId, ...]:
        """Selected task ids in the order they were selected."""
        return tuple(self._selection)

    @property
    def editing(self) -> EditSlot | None:
        return self._editing

    def get_task(self, task_id: TaskId) -> Task | None:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def is_selected(self, task_id: TaskId) -> bool:
        return task_id in self._selection

    def visible_tasks(
        self,
        task_filter: TaskFilter | str = TaskFilter.ALL,
        search: str = "",
        sort_by: SortKey | str = SortKey.DATE,
    ) -> TaskView:
        """Derived view of the current collection.

        Unknown filter values behave like "all"; unknown sort keys like "date".
        """
        return TaskView(
            self._tasks,
            TaskFilter.parse(task_filter),
            search or "",
            SortKey.parse(sort_by),
        )

    def view(self, state: ViewState) -> TaskView:
        return self.visible_tasks(state.filter, state.search, state.sort_by)

    def total_count(self) -> int:
        return len(self._tasks)

    def active_count(self) -> int:
        return sum(1 for task in self._tasks if not task.completed)

    def completed_count(self) -> int:
        return sum(1 for task in self._tasks if task.completed)

    def all_tags(self) -> list[str]:
        """Distinct non-empty tags in first-seen order."""
        return list(dict.fromkeys(task.tag for task in self._tasks if task.tag))

    def today(self) -> date:
        """Today's calendar date under the store's timezone policy."""
        return dates.today(self.timezone, now=self._clock())

    def is_overdue(self, due_date: date | str | None) -> bool:
        """True if *due_date* is set and on a calendar day before today."""
        return dates.is_overdue(parse_due_date(due_date), self.today())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _now_ms(self) -> int:
        return int(self._clock().timestamp() * 1000)

    def _index_of(self, task_id: Any) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _replace(self, index: int, task: Task) -> list[Task]:
        tasks = list(self._tasks)
        tasks[index] = task
        return tasks
