"""Shared fixtures for vclock tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from vclock import VClockConfig, configure


@pytest.fixture(autouse=True)
def default_config() -> Iterator[None]:
    """Every test starts and ends with the default configuration active."""
    configure(VClockConfig())
    yield
    configure(VClockConfig())


@pytest.fixture
def vclock_logs(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    """Capture records from the ``vclock`` logger, which does not propagate."""
    log = logging.getLogger("vclock")
    log.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="vclock")
    yield caplog
    log.removeHandler(caplog.handler)
