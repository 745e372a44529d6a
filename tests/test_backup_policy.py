"""Tests for the BackupPolicy."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from recentkit.config import Config
from recentkit.core.backup_policy import BackupFrequency, BackupPolicy, days_between
from recentkit.core.recent_files import RecentFiles
from recentkit.data import recent_store
from recentkit.models.file_spec import FileSpec

NOW = datetime(2026, 3, 15, 12, 0)


class FakeApp:
    def __init__(self, succeed: bool = True) -> None:
        self.succeed = succeed
        self.prompted = 0
        self.silent = 0

    def prompt_for_backup(self) -> bool:
        self.prompted += 1
        return self.succeed

    def backup_without_prompt(self) -> bool:
        self.silent += 1
        return self.succeed


class FakeSuggester:
    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.asked = 0

    def suggest_backup(self) -> bool:
        self.asked += 1
        return self.answer


@pytest.fixture
def config(tmp_path: Path) -> Config:
    return Config(data_dir=tmp_path)


@pytest.fixture
def app() -> FakeApp:
    return FakeApp()


@pytest.fixture
def policy(config: Config, app: FakeApp) -> BackupPolicy:
    return BackupPolicy(config, app, clock=lambda: NOW)


def backed_up_days_ago(days: int) -> FileSpec:
    return FileSpec(path="/data/notes", last_backup=NOW - timedelta(days=days))


class TestDaysBetween:
    def test_crossing_midnight_counts_one_day(self) -> None:
        assert days_between(datetime(2026, 3, 14, 23, 59), datetime(2026, 3, 15, 0, 1)) == 1

    def test_same_day(self) -> None:
        assert days_between(datetime(2026, 3, 15, 0, 1), datetime(2026, 3, 15, 23, 59)) == 0

    def test_future_date(self) -> None:
        assert days_between(datetime(2026, 4, 1), NOW) == 0

    def test_month_boundary(self) -> None:
        assert days_between(datetime(2026, 2, 27, 8, 0), datetime(2026, 3, 2, 8, 0)) == 3

    def test_aware_datetimes(self) -> None:
        last = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
        now = datetime(2026, 3, 8, 12, 0, tzinfo=timezone.utc)
        assert days_between(last, now) == 7


class TestFrequency:
    def test_from_pref(self) -> None:
        assert BackupFrequency.from_pref("automatic-backups") is BackupFrequency.AUTOMATIC
        assert BackupFrequency.from_pref(" Manual-Backups ") is BackupFrequency.MANUAL
        assert BackupFrequency.from_pref("whenever") is BackupFrequency.OCCASIONAL
        assert BackupFrequency.from_pref("") is BackupFrequency.OCCASIONAL

    def test_default_is_occasional(self, policy: BackupPolicy) -> None:
        assert policy.frequency is BackupFrequency.OCCASIONAL
        assert policy.days_between_backups == 7

    def test_setter_persists(self, policy: BackupPolicy, config: Config) -> None:
        policy.frequency = BackupFrequency.AUTOMATIC
        assert config.backup_frequency == "automatic-backups"
        assert Config(data_dir=config.data_dir).backup_frequency == "automatic-backups"


class TestOccasional:
    def test_due_after_threshold(self, policy: BackupPolicy, app: FakeApp) -> None:
        assert policy.handle_close(backed_up_days_ago(7)) is True
        assert app.prompted == 1

    def test_not_due_before_threshold(self, policy: BackupPolicy, app: FakeApp) -> None:
        assert policy.handle_close(backed_up_days_ago(6)) is False
        assert app.prompted == 0

    def test_never_backed_up_is_due(self, policy: BackupPolicy, app: FakeApp) -> None:
        assert policy.handle_close(FileSpec(path="/data/notes")) is True
        assert app.prompted == 1

    def test_unparsable_stored_date_is_due(self, policy: BackupPolicy, app: FakeApp) -> None:
        spec = FileSpec.from_file_info("path=/data/notes;last-backup=not a date;")
        assert spec.last_backup is None
        assert policy.handle_close(spec) is True

    def test_custom_threshold(self, policy: BackupPolicy, app: FakeApp) -> None:
        policy.days_between_backups = 2
        assert policy.handle_close(backed_up_days_ago(2)) is True

    def test_major_event_always_suggests(self, policy: BackupPolicy, app: FakeApp) -> None:
        assert policy.handle_major_event(backed_up_days_ago(0)) is True
        assert app.prompted == 1

    def test_declined_suggestion(self, config: Config, app: FakeApp) -> None:
        suggester = FakeSuggester(answer=False)
        policy = BackupPolicy(config, app, suggester, clock=lambda: NOW)
        spec = FileSpec(path="/data/notes")
        assert policy.handle_close(spec) is False
        assert suggester.asked == 1
        assert app.prompted == 0
        assert spec.last_backup is None

    def test_accepted_suggestion(self, config: Config, app: FakeApp) -> None:
        suggester = FakeSuggester(answer=True)
        policy = BackupPolicy(config, app, suggester, clock=lambda: NOW)
        assert policy.handle_close(FileSpec(path="/data/notes")) is True
        assert suggester.asked == 1
        assert app.prompted == 1

    def test_failed_backup_not_stamped(self, config: Config) -> None:
        policy = BackupPolicy(config, FakeApp(succeed=False), clock=lambda: NOW)
        spec = FileSpec(path="/data/notes")
        assert policy.handle_close(spec) is False
        assert spec.last_backup is None


class TestOtherFrequencies:
    def test_automatic_backs_up_silently(self, policy: BackupPolicy, app: FakeApp) -> None:
        policy.frequency = BackupFrequency.AUTOMATIC
        assert policy.handle_close(backed_up_days_ago(0)) is True
        assert app.silent == 1
        assert app.prompted == 0

    def test_manual_never_backs_up(self, policy: BackupPolicy, app: FakeApp) -> None:
        policy.frequency = BackupFrequency.MANUAL
        assert policy.handle_close(FileSpec(path="/data/notes")) is False
        assert policy.handle_major_event(FileSpec(path="/data/notes")) is False
        assert app.prompted == 0
        assert app.silent == 0


class TestGuards:
    def test_no_spec_or_path(self, policy: BackupPolicy, app: FakeApp) -> None:
        assert policy.handle_close(None) is False
        assert policy.handle_close(FileSpec()) is False
        assert app.prompted == 0

    def test_no_app_attached(self, config: Config) -> None:
        policy = BackupPolicy(config, clock=lambda: NOW)
        assert policy.handle_close(FileSpec(path="/data/notes")) is False

    def test_attach(self, config: Config, app: FakeApp) -> None:
        policy = BackupPolicy(config, clock=lambda: NOW)
        policy.attach(app)
        assert policy.handle_close(FileSpec(path="/data/notes")) is True


class TestStamping:
    def test_backup_date_persisted_in_slot(self, policy: BackupPolicy, config: Config) -> None:
        spec = FileSpec(path="/data/notes")
        assert policy.handle_close(spec, "notes", 2) is True
        assert spec.last_backup == NOW
        stored = recent_store.load_slot(config, "notes", 2)
        assert stored.path == "/data/notes"
        assert stored.last_backup == NOW

    def test_close_current(self, policy: BackupPolicy, config: Config, app: FakeApp) -> None:
        recent = RecentFiles(config, "notes")
        recent.add_recent_path("file", "/data/notes")
        assert policy.handle_close_current(recent) is True
        assert recent_store.load_slot(config, "notes", 0).last_backup == NOW

    def test_close_current_empty_list(self, policy: BackupPolicy, config: Config, app: FakeApp) -> None:
        assert policy.handle_close_current(RecentFiles(config)) is False
        assert app.prompted == 0

    def test_days_since_backup(self, policy: BackupPolicy) -> None:
        assert policy.days_since_backup(FileSpec(path="/x")) is None
        assert policy.days_since_backup(backed_up_days_ago(3)) == 3

    def test_is_backup_due(self, policy: BackupPolicy) -> None:
        assert policy.is_backup_due(FileSpec(path="/x"))
        assert policy.is_backup_due(backed_up_days_ago(8))
        assert not policy.is_backup_due(backed_up_days_ago(1))

    def test_manual_backup_stamp(self, policy: BackupPolicy, config: Config) -> None:
        spec = FileSpec(path="/data/notes")
        policy.save_last_backup_date(spec)
        assert spec.last_backup == NOW
        assert recent_store.load_slot(config, "", 0).last_backup == NOW

    def test_file_outside_the_list_leaves_slots_alone(self, policy: BackupPolicy, config: Config) -> None:
        recent = RecentFiles(config)
        recent.add_recent_path("file", "/data/top")
        evicted = FileSpec(path="/data/evicted")
        assert policy.handle_close(evicted, recent.qualifier, None) is True
        assert evicted.last_backup == NOW
        top = recent_store.load_slot(config, "", 0)
        assert top.path == "/data/top"
        assert top.last_backup is None
