"""Tests for the derived views of TaskStore: filter, search, sort, counts, tags, overdue."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from todolist.models import SortKey, TaskFilter, ViewState
from todolist.services.task_store import TaskStore, TaskView


def _has_zone(name: str) -> bool:
    try:
        ZoneInfo(name)
    except ZoneInfoNotFoundError:
        return False
    return True


def _texts(view) -> list[str]:
    return [task.text for task in view]


@pytest.fixture()
def populated(store, clock):
    """Store with five tasks created one minute apart."""
    rows = [
        ("Buy milk", "low", None, "shopping"),
        ("File taxes", "high", "2026-04-15", "admin"),
        ("Call plumber", "medium", "2026-03-12", None),
        ("Renew passport", "high", None, "Admin"),
        ("Water plants", "low", "2026-03-11", "home"),
    ]
    for text, priority, due, tag in rows:
        store.add_task(text, priority=priority, due_date=due, tag=tag)
        clock.advance(minutes=1)
    store.toggle_task(store.tasks[2].id)  # Call plumber done
    return store


# ===========================================================================
# Filter
# ===========================================================================


class TestFilter:
    def test_all_keeps_everything(self, populated):
        assert len(populated.visible_tasks("all")) == 5

    def test_active_excludes_completed(self, populated):
        view = populated.visible_tasks("active", "", "date")
        assert all(not task.completed for task in view)
        assert "Call plumber" not in _texts(view)
        assert len(view) == 4

    def test_completed_keeps_only_completed(self, populated):
        assert _texts(populated.visible_tasks("completed")) == ["Call plumber"]

    def test_unknown_filter_behaves_like_all(self, populated):
        assert len(populated.visible_tasks("bogus")) == 5

    def test_accepts_enum(self, populated):
        assert len(populated.visible_tasks(TaskFilter.ACTIVE)) == 4


# ===========================================================================
# Search
# ===========================================================================


class TestSearch:
    def test_matches_text_case_insensitively(self, populated):
        assert _texts(populated.visible_tasks(search="MILK")) == ["Buy milk"]

    def test_matches_tag(self, populated):
        assert set(_texts(populated.visible_tasks(search="admin"))) == {
            "File taxes",
            "Renew passport",
        }

    def test_empty_search_matches_all(self, populated):
        assert len(populated.visible_tasks(search="")) == 5

    def test_no_match(self, populated):
        assert _texts(populated.visible_tasks(search="zebra")) == []

    def test_search_combines_with_filter(self, populated):
        view = populated.visible_tasks("completed", "plumb")
        assert _texts(view) == ["Call plumber"]
        assert _texts(populated.visible_tasks("active", "plumb")) == []


# ===========================================================================
# Sort
# ===========================================================================


class TestSort:
    def test_date_is_newest_first(self, populated):
        assert _texts(populated.visible_tasks(sort_by="date")) == [
            "Water plants",
            "Renew passport",
            "Call plumber",
            "File taxes",
            "Buy milk",
        ]

    def test_priority_high_to_low_stable(self, populated):
        assert _texts(populated.visible_tasks(sort_by="priority")) == [
            "File taxes",
            "Renew passport",
            "Call plumber",
            "Buy milk",
            "Water plants",
        ]

    def test_due_date_ascending_undated_last(self, populated):
        assert _texts(populated.visible_tasks(sort_by=SortKey.DUE_DATE)) == [
            "Water plants",
            "Call plumber",
            "File taxes",
            "Buy milk",
            "Renew passport",
        ]

    def test_undated_after_dated_regardless_of_order(self, store):
        store.add_task("none 1")
        store.add_task("late", due_date="2030-01-01")
        store.add_task("none 2")
        store.add_task("early", due_date="2020-01-01")

        view = list(store.visible_tasks(sort_by="dueDate"))

        dated = [task.due_date is not None for task in view]
        assert dated == [True, True, False, False]
        assert [t.text for t in view] == ["early", "late", "none 1", "none 2"]

    def test_date_ties_keep_insertion_order(self, store):
        store.add_task("first")
        store.add_task("second")
        store.add_task("third")
        assert _texts(store.visible_tasks(sort_by="date")) == ["first", "second", "third"]

    def test_unknown_sort_behaves_like_date(self, populated):
        assert _texts(populated.visible_tasks(sort_by="bogus")) == _texts(
            populated.visible_tasks(sort_by="date")
        )

    def test_priority_scenario(self, store, clock):
        a = store.add_task("Buy milk", priority="low")
        yesterday = clock.now.date() - timedelta(days=1)
        b = store.add_task("File taxes", priority="high", due_date=yesterday)

        assert store.is_overdue(b.due_date) is True
        assert list(store.visible_tasks("all", "", "priority")) == [b, a]


# ===========================================================================
# TaskView
# ===========================================================================


class TestTaskView:
    def test_view_is_restartable(self, populated):
        view = populated.visible_tasks("active")
        assert isinstance(view, TaskView)
        assert list(view) == list(view)

    def test_view_is_a_snapshot(self, populated):
        view = populated.visible_tasks()
        populated.add_task("added later")
        assert "added later" not in _texts(view)
        assert "added later" in _texts(populated.visible_tasks())

    def test_view_not_affected_by_later_toggle(self, store):
        task = store.add_task("x")
        view = store.visible_tasks("active")
        store.toggle_task(task.id)
        assert _texts(view) == ["x"]

    def test_view_from_state(self, populated):
        state = ViewState(filter="active", search="admin", sort_by="priority")
        assert _texts(populated.view(state)) == ["File taxes", "Renew passport"]


# ===========================================================================
# Counts and tags
# ===========================================================================


class TestCountsAndTags:
    def test_counts(self, populated):
        assert populated.total_count() == 5
        assert populated.active_count() == 4
        assert populated.completed_count() == 1

    def test_counts_ignore_filter(self, populated):
        populated.visible_tasks("completed")
        assert populated.active_count() == 4

    def test_all_tags_first_seen_order(self, populated):
        assert populated.all_tags() == ["shopping", "admin", "Admin", "home"]

    def test_all_tags_distinct(self, store):
        store.add_task("a", tag="x")
        store.add_task("b", tag="x")
        store.add_task("c")
        assert store.all_tags() == ["x"]

    def test_empty_store(self, store):
        assert store.all_tags() == []
        assert store.active_count() == 0
        assert list(store.visible_tasks()) == []


# ===========================================================================
# Overdue
# ===========================================================================


class TestOverdue:
    def test_none_is_not_overdue(self, store):
        assert store.is_overdue(None) is False
        assert store.is_overdue("") is False

    def test_yesterday_is_overdue(self, store, clock):
        assert store.is_overdue(clock.now.date() - timedelta(days=1)) is True

    def test_today_is_not_overdue(self, store, clock):
        assert store.is_overdue(clock.now.date()) is False

    def test_late_in_the_day_today_is_not_overdue(self, store, clock):
        clock.now = clock.now.replace(hour=23, minute=59)
        assert store.is_overdue(clock.now.date()) is False

    def test_future_is_not_overdue(self, store, clock):
        assert store.is_overdue(clock.now.date() + timedelta(days=3)) is False

    def test_iso_string(self, store):
        assert store.is_overdue("2026-03-09") is True
        assert store.is_overdue("2026-03-10") is False

    @pytest.mark.skipif(not _has_zone("Pacific/Auckland"), reason="tz database missing")
    def test_timezone_policy_decides_today(self, adapter):
        instant = datetime(2026, 3, 10, 20, 0, tzinfo=UTC)  # 11 March in Auckland
        utc_store = TaskStore(adapter, timezone="UTC", clock=lambda: instant)
        nz_store = TaskStore(adapter, timezone="Pacific/Auckland", clock=lambda: instant)

        assert utc_store.today() == date(2026, 3, 10)
        assert nz_store.today() == date(2026, 3, 11)
        assert utc_store.is_overdue("2026-03-10") is False
        assert nz_store.is_overdue("2026-03-10") is True
