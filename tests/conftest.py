"""Shared fixtures for hosts file tests."""

import logging
from pathlib import Path

import pytest

SAMPLE_HOSTS = (
    "# Static table lookup for hostnames.\n"
    "127.0.0.1 localhost\n"
    "::1 localhost ip6-localhost\n"
    "\n"
    "10.0.0.5 foo.test # dev box\n"
    "this line is not an entry!\n"
)


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("hostile.tests")


@pytest.fixture
def hosts_file(tmp_path) -> Path:
    """A hosts file with entries, comments, blank and malformed lines."""
    path = tmp_path / "hosts"
    path.write_bytes(SAMPLE_HOSTS.encode("utf-8"))
    return path


@pytest.fixture
def list_backups():
    """Return the timestamped backup copies created next to a path."""

    def _list(path: Path):
        return sorted(path.parent.glob(f"{path.name}.*"))

    return _list


@pytest.fixture(autouse=True)
def reset_app_logger():
    """Drop handlers bound to a previous test's captured streams."""
    yield
    logging.getLogger("hostile").handlers.clear()
