"""Unit tests for services/config_service.py.

Uses a real ConfigService pointed at the temporary directories set up by the
autouse isolation fixture.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from todolist.adapters.json_file import JsonFileAdapter
from todolist.exceptions import ConfigError
from todolist.models import AppConfig, SortKey
from todolist.services.config_service import ConfigService, get_config_service


@pytest.fixture()
def svc() -> ConfigService:
    service = ConfigService()
    _ = service.config
    return service


class TestConfigServiceInit:
    def test_directories_created(self, svc, isolate_dirs):
        assert svc.config_dir == Path(isolate_dirs["config"])
        assert svc.config_dir.is_dir()
        assert svc.data_dir.is_dir()

    def test_default_config_written_on_first_run(self, svc):
        assert svc.config_path.exists()
        saved = json.loads(svc.config_path.read_text())
        assert saved["ui"]["timezone"] == "local"
        assert saved["storage"]["key"] == "todo-tasks"

    def test_existing_config_is_loaded(self, svc):
        svc.config_path.write_text(
            AppConfig.model_validate({"ui": {"default_sort": "priority"}}).model_dump_json()
        )
        fresh = ConfigService()
        assert fresh.config.ui.default_sort is SortKey.PRIORITY

    def test_corrupt_config_raises_config_error(self, svc):
        svc.config_path.write_text("{not json")
        with pytest.raises(ConfigError):
            ConfigService().load_config()

    def test_get_config_service_is_cached(self):
        assert get_config_service() is get_config_service()


class TestValues:
    def test_get_value(self, svc):
        assert svc.get_value("ui.timezone") == "local"
        assert svc.get_value("logging.level") == "INFO"

    def test_get_unknown_key(self, svc):
        with pytest.raises(ConfigError):
            svc.get_value("ui.colour")
        with pytest.raises(ConfigError):
            svc.get_value("ui.timezone.extra")

    def test_set_value_persists(self, svc):
        svc.set_value("logging.level", "debug")
        assert svc.config.logging.level == "DEBUG"
        assert json.loads(svc.config_path.read_text())["logging"]["level"] == "DEBUG"

    def test_set_enum_value(self, svc):
        svc.set_value("ui.default_sort", "dueDate")
        assert svc.config.ui.default_sort is SortKey.DUE_DATE

    def test_set_invalid_value_leaves_config_untouched(self, svc):
        before = svc.config_path.read_text()
        with pytest.raises(ConfigError):
            svc.set_value("logging.level", "LOUD")
        assert svc.config.logging.level == "INFO"
        assert svc.config_path.read_text() == before

    def test_set_unknown_key(self, svc):
        with pytest.raises(ConfigError):
            svc.set_value("nope", "1")

    def test_reset_config(self, svc):
        svc.set_value("logging.level", "ERROR")
        svc.reset_config()
        assert svc.config.logging.level == "INFO"


class TestTasksPath:
    def test_default_path_in_data_dir(self, svc):
        assert svc.tasks_path() == svc.data_dir / "todo-tasks.json"

    def test_configured_path(self, svc, tmp_path):
        target = tmp_path / "elsewhere" / "mine.json"
        svc.set_value("storage.path", str(target))
        assert svc.tasks_path() == target

    def test_env_override_wins(self, svc, tmp_path, monkeypatch):
        target = tmp_path / "env.json"
        svc.set_value("storage.path", str(tmp_path / "config.json"))
        monkeypatch.setenv("TODOLIST_DATA", str(target))
        assert svc.tasks_path() == target

    def test_build_adapter(self, svc):
        adapter = svc.build_adapter()
        assert isinstance(adapter, JsonFileAdapter)
        assert adapter.path == svc.tasks_path()
        assert adapter.key == "todo-tasks"
