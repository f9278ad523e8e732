"""Tests for dependency injection."""

import pytest
from unittest.mock import MagicMock, patch

from meetgrid import state
from meetgrid.errors import ServiceUnavailableError


class TestGetOptionalEventBus:
    def test_returns_bus(self):
        from meetgrid.dependencies import get_optional_event_bus

        mock_bus = MagicMock()
        with patch.object(state, "event_bus", mock_bus):
            assert get_optional_event_bus() is mock_bus

    def test_returns_none(self):
        from meetgrid.dependencies import get_optional_event_bus

        with patch.object(state, "event_bus", None):
            assert get_optional_event_bus() is None


class TestRequireDatabase:
    def test_passes_when_enabled(self):
        from meetgrid.dependencies import require_database

        with patch.object(state, "db_enabled", True):
            assert require_database() is None

    def test_raises_when_disabled(self):
        from meetgrid.dependencies import require_database

        with patch.object(state, "db_enabled", False):
            with pytest.raises(ServiceUnavailableError) as exc_info:
                require_database()
            assert exc_info.value.status_code == 503
