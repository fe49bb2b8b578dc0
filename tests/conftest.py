"""
Pytest configuration and shared fixtures.
Provides isolated settings, stores, and API bindings for all tests.
"""

from pathlib import Path

import pytest

from daybook.api import api_state
from daybook.config import AppSettings, LoggingSettings, ServerSettings, StorageSettings
from daybook.core import EventStore, SnapshotFile
from daybook.domain import EventDraft
from daybook.services import CalendarService, ServiceContext


# ==================== Configuration Fixtures ====================

@pytest.fixture
def app_settings(tmp_path: Path) -> AppSettings:
    """Settings pointing every file at the test's temporary directory."""
    return AppSettings(
        storage=StorageSettings(
            data_file=tmp_path / "data" / "calendar_events.json",
            export_dir=tmp_path / "exports",
            default_color="#4A90E2",
        ),
        server=ServerSettings(host="127.0.0.1", port=8000),
        logging=LoggingSettings(level="DEBUG", log_dir=tmp_path / "logs"),
    )


# ==================== Store Fixtures ====================

@pytest.fixture
def make_draft():
    """Factory fixture for event drafts."""
    def _create(
        start_time: str,
        end_time: str,
        name: str = "Event",
        description: str = "",
        color: str = "#4A90E2",
    ) -> EventDraft:
        return EventDraft(
            name=name,
            start_time=start_time,
            end_time=end_time,
            description=description,
            color=color,
        )

    return _create


@pytest.fixture
def store() -> EventStore:
    """An empty in-memory store."""
    return EventStore()


@pytest.fixture
def populated_store(store, make_draft) -> EventStore:
    """Store with events on two days of March 2024 and one in April."""
    store.add_event("2024-03-05", make_draft("09:00", "09:30", name="Standup"))
    store.add_event(
        "2024-03-05",
        make_draft("14:00", "15:00", name="Planning", description="Weekly meeting with the team"),
    )
    store.add_event("2024-03-12", make_draft("10:00", "11:00", name="Dentist"))
    store.add_event("2024-04-01", make_draft("08:00", "08:15", name="Rent reminder"))
    return store


@pytest.fixture
def snapshot_file(app_settings) -> SnapshotFile:
    return SnapshotFile(app_settings.storage.data_file)


# ==================== Service Fixtures ====================

@pytest.fixture
def service_context(app_settings) -> ServiceContext:
    return ServiceContext(settings=app_settings)


@pytest.fixture
def calendar_service(service_context) -> CalendarService:
    return CalendarService(service_context)


@pytest.fixture
def bound_api(service_context):
    """Point the shared API state at an isolated context for one test."""
    api_state.bind(service_context)
    yield api_state
    api_state.reset()


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
