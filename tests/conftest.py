"""Pytest fixtures for the hostingde test suite."""

import logging
import logging.handlers
import os
from collections.abc import Callable, Generator
from typing import Any

import pytest

from hostingde.transport import API_URL, ZONE_UPDATE_PATH

ZONE_UPDATE_URL = f"{API_URL}{ZONE_UPDATE_PATH}"

# Credentials for the live hosting.de tests (skipped when unset)
HOSTINGDE_API_KEY = os.environ.get("HOSTINGDE_API_KEY", "")
HOSTINGDE_ZONE_NAME = os.environ.get("HOSTINGDE_ZONE_NAME", "")


@pytest.fixture(scope="session")
def zone_update_url() -> str:
    """Return the full zoneUpdate endpoint URL."""
    return ZONE_UPDATE_URL


@pytest.fixture(scope="session")
def hostingde_credentials() -> tuple[str, str]:
    """Return (api_key, zone_name) for the live API, or skip."""
    if not HOSTINGDE_API_KEY or not HOSTINGDE_ZONE_NAME:
        pytest.skip("HOSTINGDE_API_KEY and HOSTINGDE_ZONE_NAME not set")
    return HOSTINGDE_API_KEY, HOSTINGDE_ZONE_NAME


def _success_body(
    records: list[dict[str, Any]] | None = None, zone_name: str = "example.org"
) -> dict[str, Any]:
    """Build a zoneUpdate reply reporting success."""
    return {
        "errors": [],
        "warnings": [],
        "metadata": {"clientTransactionId": "", "serverTransactionId": "20180414-abc"},
        "status": "success",
        "response": {
            "records": records or [],
            "zoneConfig": {
                "id": "zone-id-1",
                "name": zone_name,
                "nameUnicode": zone_name,
                "accountId": "account-1",
                "status": "active",
                "type": "NATIVE",
                "soaValues": {
                    "expire": 1209600,
                    "negativeTtl": 180,
                    "refresh": 86400,
                    "retry": 7200,
                    "ttl": 86400,
                },
                "zoneTransferWhitelist": [],
            },
        },
    }


def _error_body(text: str = "Zone not found") -> dict[str, Any]:
    """Build a zoneUpdate reply reporting an error."""
    return {
        "errors": [
            {"code": 10205, "contextObject": "", "contextPath": "", "text": text, "value": ""}
        ],
        "warnings": [],
        "metadata": {"clientTransactionId": "", "serverTransactionId": "20180414-def"},
        "status": "error",
        "response": None,
    }


@pytest.fixture
def make_success_body() -> Callable[..., dict[str, Any]]:
    """Factory for successful replies: make_success_body(records=[...])."""
    return _success_body


@pytest.fixture
def make_error_body() -> Callable[..., dict[str, Any]]:
    """Factory for failed replies: make_error_body(text="...")."""
    return _error_body


@pytest.fixture
def ok_body() -> dict[str, Any]:
    """A successful zoneUpdate reply with no echoed records."""
    return _success_body()


@pytest.fixture
def failed_body() -> dict[str, Any]:
    """A failed zoneUpdate reply."""
    return _error_body()


class LogCapture:
    """Helper class to capture and inspect log records."""

    def __init__(self, handler: logging.handlers.MemoryHandler) -> None:
        self._handler = handler

    @property
    def records(self) -> list[logging.LogRecord]:
        """Get all captured log records."""
        return self._handler.buffer

    def get_records(
        self, level: int | None = None, name: str | None = None
    ) -> list[logging.LogRecord]:
        """Get log records filtered by level and/or logger name.

        Args:
            level: Filter by log level (e.g., logging.INFO).
            name: Filter by logger name prefix (e.g., "hostingde.transport").

        Returns:
            List of matching log records.
        """
        records = self.records
        if level is not None:
            records = [r for r in records if r.levelno == level]
        if name is not None:
            records = [r for r in records if r.name.startswith(name)]
        return records

    def get_messages(self, level: int | None = None, name: str | None = None) -> list[str]:
        """Get log messages filtered by level and/or logger name."""
        return [r.getMessage() for r in self.get_records(level, name)]

    def clear(self) -> None:
        """Clear all captured log records."""
        self._handler.buffer.clear()


@pytest.fixture
def log_capture() -> Generator[LogCapture]:
    """Capture logs from the hostingde library during a test.

    Usage:
        def test_something(log_capture):
            # do something that logs
            assert "TXT record published" in log_capture.get_messages(logging.INFO)
    """
    handler = logging.handlers.MemoryHandler(capacity=1000)
    handler.setLevel(logging.DEBUG)

    library_logger = logging.getLogger("hostingde")
    original_level = library_logger.level
    library_logger.setLevel(logging.DEBUG)
    library_logger.addHandler(handler)

    try:
        yield LogCapture(handler)
    finally:
        library_logger.removeHandler(handler)
        library_logger.setLevel(original_level)
        handler.close()
