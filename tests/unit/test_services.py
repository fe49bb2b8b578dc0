"""
Unit tests for the calendar service and settings.
"""

from datetime import date
from pathlib import Path

import pytest

from daybook.config import get_settings
from daybook.domain import NotFoundError

pytestmark = pytest.mark.unit


class TestCalendarService:
    """Tests for the service wrapping the store with settings."""

    def test_default_color_applied(self, calendar_service):
        event = calendar_service.add("2024-03-05", name="Standup", start_time="09:00", end_time="09:30")

        assert event.color == "#4A90E2"

    def test_partial_update_keeps_other_fields(self, calendar_service):
        event = calendar_service.add(
            "2024-03-05",
            name="Standup",
            start_time="09:00",
            end_time="09:30",
            description="daily",
            color="#FF0000",
        )

        updated = calendar_service.update("2024-03-05", event.id, end_time="09:45")

        assert (updated.name, updated.start_time, updated.end_time) == ("Standup", "09:00", "09:45")
        assert (updated.description, updated.color) == ("daily", "#FF0000")

    def test_update_unknown_event(self, calendar_service):
        with pytest.raises(NotFoundError):
            calendar_service.update("2024-03-05", 1, name="Nothing")

    def test_mutations_persist(self, calendar_service, app_settings):
        calendar_service.add("2024-03-05", name="Standup", start_time="09:00", end_time="09:30")

        assert app_settings.storage.data_file.exists()

    def test_month_overview_counts(self, calendar_service):
        calendar_service.add("2024-03-05", name="A", start_time="09:00", end_time="09:30")
        calendar_service.add("2024-03-05", name="B", start_time="10:00", end_time="10:30")
        calendar_service.add("2024-04-01", name="C", start_time="10:00", end_time="10:30")

        overview = calendar_service.month_overview(2024, 3)

        assert overview.counts == {5: 2}
        assert overview.weeks[0][5] == 1
        assert overview.today is None

    def test_month_overview_marks_today(self, calendar_service):
        current = date.today()

        assert calendar_service.month_overview(current.year, current.month).today == current.day

    def test_export_uses_settings_directory(self, calendar_service, app_settings):
        path = calendar_service.export(context=date(2024, 3, 5))

        assert path == app_settings.storage.export_dir / "calendar-events-2024-03-05.json"
        assert path.exists()

    def test_import_file(self, calendar_service, tmp_path):
        source = tmp_path / "backup.json"
        source.write_text(
            '{"2024-03-05": [{"id": 1, "name": "A", "startTime": "09:00", "endTime": "10:00"}]}',
            encoding="utf-8",
        )

        assert calendar_service.import_file(source) == 1
        assert calendar_service.list_day("2024-03-05")[0].name == "A"

    def test_import_missing_file(self, calendar_service, tmp_path):
        with pytest.raises(FileNotFoundError):
            calendar_service.import_file(tmp_path / "missing.json")


class TestSettings:
    """Tests for environment-driven settings."""

    @pytest.fixture(autouse=True)
    def fresh_settings(self):
        get_settings.cache_clear()
        yield
        get_settings.cache_clear()

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DAYBOOK_DATA_FILE", str(tmp_path / "events.json"))
        monkeypatch.setenv("DAYBOOK_API_PORT", "9001")
        monkeypatch.setenv("DAYBOOK_DEFAULT_COLOR", "#123456")
        monkeypatch.setenv("DAYBOOK_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.storage.data_file == tmp_path / "events.json"
        assert settings.server.port == 9001
        assert settings.storage.default_color == "#123456"
        assert settings.logging.level == "DEBUG"

    def test_bad_port_falls_back(self, monkeypatch):
        monkeypatch.setenv("DAYBOOK_API_PORT", "not-a-port")

        assert get_settings().server.port == 8000

    def test_log_file_inside_log_dir(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DAYBOOK_LOG_DIR", str(tmp_path))

        assert get_settings().logging.log_file == Path(tmp_path) / "daybook.log"
