"""
Pytest configuration and fixtures for termotion tests.
"""
import os
import sys

import pytest

# Add repository root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from termotion import log  # noqa: E402


@pytest.fixture
def log_records():
    """Collect (level, message) pairs emitted through termotion.log at debug level."""
    records = []
    log.set_level(log.Level.DEBUG)
    log.set_callback(lambda level, message: records.append((level, message)))
    yield records
    log.set_callback(None)
    log.set_level(log.Level.WARN)
