"""Shared pytest configuration and fixtures for collabsheets tests."""

import pytest

from collabsheets.notifications import NotificationHub
from collabsheets.registry import Registry
from collabsheets.service import CollaborationService
from tests.helpers.recording_sink import RecordingDiagnostics


@pytest.fixture
def diagnostics() -> RecordingDiagnostics:
    return RecordingDiagnostics()


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def hub() -> NotificationHub:
    return NotificationHub()


@pytest.fixture
def service(diagnostics) -> CollaborationService:
    return CollaborationService(diagnostics=diagnostics)


@pytest.fixture
def budget_service(service) -> CollaborationService:
    """Service with alice owning "Budget" and bob as a second user."""
    service.create_user("alice")
    service.create_user("bob")
    service.create_sheet("alice", "Budget")
    return service
