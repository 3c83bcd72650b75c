import logging

import pytest


@pytest.fixture
def service_logs(caplog):
    """Global fixture capturing log records emitted by the services."""
    caplog.set_level(logging.INFO, logger="src")
    return caplog
