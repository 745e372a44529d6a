"""Tests for the Config system."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from recentkit.config import Config, get_config, reset_config


@pytest.fixture(autouse=True)
def _clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(data_dir=tmp_path)


class TestConfig:
    def test_default_values(self, config: Config) -> None:
        assert config.recent_files_max == 5
        assert config.backup_frequency == "occasional-backups"
        assert config.days_between_backups == 7
        assert config.launch_at_startup == "last-file-opened"
        assert config.purge_inaccessible_files == "never"
        assert config.essential_path == ""

    def test_set_pref_persists(self, tmp_path: Path, config: Config) -> None:
        config.set_pref("recent-file-0", "path=/a;")
        reloaded = Config(data_dir=tmp_path)
        assert reloaded.get_pref("recent-file-0") == "path=/a;"

    def test_get_pref_missing_returns_default(self, config: Config) -> None:
        assert config.get_pref("no-such-key", "fallback") == "fallback"
        assert not config.has_pref("no-such-key")

    def test_get_pref_as_int_falls_back(self, config: Config) -> None:
        config.set_pref("recent-files-max", "lots")
        assert config.get_pref_as_int("recent-files-max", 5) == 5

    def test_batch_update_single_write(self, tmp_path: Path, config: Config) -> None:
        with config.batch_update():
            config.set_pref("backups-to-keep", 3)
            config.set_pref("essential-path", "/docs")
            assert not (tmp_path / "config.json").exists()
        data = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
        assert data["backups-to-keep"] == 3
        assert data["essential-path"] == "/docs"

    def test_nested_batch_writes_once_at_outer_exit(self, tmp_path: Path, config: Config) -> None:
        with config.batch_update():
            with config.batch_update():
                config.set_pref("theme", "dark")
            assert not (tmp_path / "config.json").exists()
        assert Config(data_dir=tmp_path).theme == "dark"

    def test_malformed_file_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "config.json").write_text("{not json", encoding="utf-8")
        config = Config(data_dir=tmp_path)
        assert config.recent_files_max == 5

    def test_backup_folder_none_when_empty(self, config: Config) -> None:
        assert config.backup_folder is None
        config.backup_folder = Path("/backups")
        assert config.backup_folder == Path("/backups")

    def test_unwritable_data_dir_keeps_values_in_memory(self, tmp_path: Path) -> None:
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        config = Config(data_dir=blocker)
        config.set_pref("essential-path", "/docs")
        with config.batch_update():
            config.set_pref("backups-to-keep", 3)
        assert config.essential_path == "/docs"
        assert config.backups_to_keep == 3
        assert blocker.read_text(encoding="utf-8") == ""

    def test_get_config_is_shared(self) -> None:
        assert get_config() is get_config()
