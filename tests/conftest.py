"""
Shared fixtures for WorkTrack tests

Test strategy:
1. Unit tests for individual components (models, store, governance, auth)
2. Flow tests through the orchestrator
3. No real files unless a test is about the file backend (tmp_path)
"""

import pytest

from worktrack.audit import AuditLogger
from worktrack.config import AppSettings, AuthSettings
from worktrack.governance import EditGovernance
from worktrack.models.audit import AuditEvent
from worktrack.services.storage import InMemoryKeyValueStore, RecordStore


class AuditCollector:
    """Audit sink that keeps every event for assertions."""

    def __init__(self):
        self.events: list[AuditEvent] = []

    def __call__(self, event: AuditEvent) -> None:
        self.events.append(event)

    def types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def audit_events():
    return AuditCollector()


@pytest.fixture
def audit_logger(audit_events):
    return AuditLogger(sink=audit_events)


@pytest.fixture
def empty_store(kv, audit_logger):
    """Record store over an empty namespace (not initialized)."""
    return RecordStore(kv, audit_logger=audit_logger)


@pytest.fixture
def store(empty_store):
    """Record store seeded with the default admin and two employees."""
    empty_store.initialize()
    return empty_store


@pytest.fixture
def governance(store):
    return EditGovernance(store)


@pytest.fixture
def app_settings():
    return AppSettings(_env_file=None)


@pytest.fixture
def auth_settings():
    return AuthSettings(_env_file=None)
