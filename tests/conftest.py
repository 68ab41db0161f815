"""
Pytest configuration and shared fixtures for chunktree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Isolates tests from CHUNKTREE_* environment variables and the cached
   default configuration
3. Provides commonly-used fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

SAMPLE_DATA_4 = _common.SAMPLE_DATA_4
SAMPLE_DATA_8 = _common.SAMPLE_DATA_8
make_data = _common.make_data
make_tree = _common.make_tree
chunk_of = _common.chunk_of

from chunktree.config import set_default_config
from chunktree.merkle import build


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear CHUNKTREE_* env vars and the cached default config."""
    for var in ("CHUNKTREE_TRAILING_BYTES", "CHUNKTREE_LOG_LEVEL", "CHUNKTREE_LOG_FILE"):
        monkeypatch.delenv(var, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def sample_data():
    """16-byte buffer that splits into 4 distinct chunks."""
    return SAMPLE_DATA_4


@pytest.fixture
def tree4(sample_data):
    """Tree over sample_data with 4 leaves."""
    return build(sample_data, 4)


@pytest.fixture
def tree8():
    """Tree over 8 distinct 4-byte chunks."""
    return make_tree(8)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
