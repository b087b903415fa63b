"""Unit tests for ConsoleAdapter (structured console logging).

Tests cover:
- All LoggerProtocol methods (debug, info, warning, error, critical)
- Error enrichment (error_type, error_message, error_code)
- Context binding
- JSON output and level filtering on stdout

Architecture:
- Method tests patch structlog
- Output tests render real JSON lines captured with capsys
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from src.domain.errors import InvalidInputError
from src.infrastructure.logging.console_adapter import ConsoleAdapter


@pytest.fixture
def mock_logger():
    with patch("src.infrastructure.logging.console_adapter.structlog") as mock_structlog:
        logger = MagicMock()
        mock_structlog.get_logger.return_value.bind.return_value = logger
        yield logger


@pytest.mark.unit
class TestConsoleAdapterLogging:
    """Test ConsoleAdapter logging methods."""

    def test_info_logs_message_with_context(self, mock_logger):
        adapter = ConsoleAdapter()

        adapter.info("booking_created", booking_id="b-1")

        mock_logger.info.assert_called_once_with("booking_created", booking_id="b-1")

    def test_warning_logs_message_with_context(self, mock_logger):
        adapter = ConsoleAdapter()

        adapter.warning("payout_failed", reason="Timeout")

        mock_logger.warning.assert_called_once_with("payout_failed", reason="Timeout")

    def test_error_adds_error_fields(self, mock_logger):
        """Test error() flattens the exception into structured fields."""
        adapter = ConsoleAdapter()

        adapter.error("booking_activation_failed", error=InvalidInputError("bad"), booking_id="b-1")

        mock_logger.error.assert_called_once_with(
            "booking_activation_failed",
            booking_id="b-1",
            error_type="InvalidInputError",
            error_message="bad",
            error_code="invalid_input",
        )

    def test_critical_without_error(self, mock_logger):
        adapter = ConsoleAdapter()

        adapter.critical("startup_failed", component="settings")

        mock_logger.critical.assert_called_once_with("startup_failed", component="settings")

    def test_error_without_code_attribute(self, mock_logger):
        adapter = ConsoleAdapter()

        adapter.error("unexpected", error=RuntimeError("boom"))

        kwargs = mock_logger.error.call_args.kwargs
        assert kwargs == {"error_type": "RuntimeError", "error_message": "boom"}

    def test_bind_returns_new_adapter(self, mock_logger):
        adapter = ConsoleAdapter()

        bound = adapter.bind(request_id="r-1")
        bound.debug("step")

        assert bound is not adapter
        mock_logger.bind.assert_called_once_with(request_id="r-1")
        mock_logger.bind.return_value.debug.assert_called_once_with("step")


@pytest.mark.unit
class TestConsoleAdapterOutput:
    """Test rendered stdout lines."""

    def test_json_line_carries_app_fields(self, capsys):
        adapter = ConsoleAdapter(use_json=True, app_name="chauffeur-booking", app_version="1.0")

        adapter.info("booking_created", booking_id="b-1")

        line = json.loads(capsys.readouterr().out.strip())
        assert line["event"] == "booking_created"
        assert line["level"] == "info"
        assert line["app"] == "chauffeur-booking"
        assert line["version"] == "1.0"
        assert line["booking_id"] == "b-1"
        assert "timestamp" in line

    def test_level_filtering(self, capsys):
        adapter = ConsoleAdapter(use_json=True, level="WARNING")

        adapter.info("hidden")
        adapter.warning("shown")

        lines = capsys.readouterr().out.strip().splitlines()
        assert [json.loads(line)["event"] for line in lines] == ["shown"]
