"""Pytest fixtures for labcoat testing."""
import logging
from unittest.mock import MagicMock

import pytest

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# Pytest Marker Registration
# =============================================================================

def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "experiment: Experiment engine tests")
    config.addinivalue_line("markers", "publisher: Result publisher tests")
    config.addinivalue_line("markers", "settings: Experiment settings tests")


@pytest.fixture
def publish_mock() -> MagicMock:
    """Reporter stand-in recording every Results it receives."""
    return MagicMock(return_value=None)


@pytest.fixture
def candidate_mock() -> MagicMock:
    """Candidate stand-in counting its calls."""
    return MagicMock(return_value="candidate")


@pytest.fixture
def published(publish_mock):
    """Return the Results passed to the only publish call."""
    def _published():
        assert publish_mock.call_count == 1
        return publish_mock.call_args.args[0]
    return _published
