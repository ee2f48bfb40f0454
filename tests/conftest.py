"""
Pytest configuration and shared fixtures.
"""

import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from fincalc.config import get_settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "edge_case: marks known approximation edge cases")


@pytest.fixture(autouse=True)
def fresh_settings():
    """Rebuild settings for every test so env overrides take effect."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
