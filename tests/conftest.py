"""Shared test fixtures and configuration.

Keeps tests away from the real platform directories and gives every store a
controllable clock.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from unittest.mock import patch

import pytest

from todolist.adapters.memory import MemoryAdapter
from todolist.services.task_store import TaskStore

FIXED_NOW = datetime(2026, 3, 10, 9, 30, 0)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


# ---------------------------------------------------------------------------
# Filesystem / logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path, monkeypatch):
    """Point every platformdirs lookup at *tmp_path* and reset singletons."""
    import todolist.utils.logger as logger_mod
    from todolist.services.config_service import get_config_service

    monkeypatch.delenv("TODOLIST_DATA", raising=False)
    logger_mod._logger = None
    logging.getLogger("todolist").handlers.clear()
    get_config_service.cache_clear()

    dirs = {
        "config": str(tmp_path / "config"),
        "data": str(tmp_path / "data"),
        "log": str(tmp_path / "log"),
    }
    with patch("todolist.services.config_service.user_config_dir", return_value=dirs["config"]), \
            patch("todolist.services.config_service.user_data_dir", return_value=dirs["data"]), \
            patch("todolist.adapters.json_file.user_data_dir", return_value=dirs["data"]), \
            patch("todolist.utils.logger.user_log_dir", return_value=dirs["log"]):
        yield dirs

    get_config_service.cache_clear()
    app_logger = logging.getLogger("todolist")
    app_logger.handlers.clear()
    app_logger.propagate = True
    logger_mod._logger = None


# ---------------------------------------------------------------------------
# Store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def adapter() -> MemoryAdapter:
    return MemoryAdapter()


@pytest.fixture()
def store(adapter, clock) -> TaskStore:
    """Empty, loaded store on an in-memory adapter with a fixed clock."""
    return TaskStore.open(adapter, clock=clock)
