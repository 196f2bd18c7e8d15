"""
Fixtures and test setup for the pytest suite.
"""

import os
import sys

import pytest

# Set test environment variables BEFORE any application code is imported.
os.environ["DATABASE_URL"] = "sqlite:///./test_ibd.db"
os.environ["ENVIRONMENT"] = "test"
os.environ.pop("ENUM_REVERT_POLICY", None)

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from ibd.services.token_store import TokenStore


@pytest.fixture
def db_url(tmp_path):
    """URL of a fresh SQLite database file for one test"""
    return f"sqlite:///{tmp_path / 'ibd_test.db'}"


@pytest.fixture
def token_store(tmp_path):
    """Token store backed by a file under tmp_path"""
    return TokenStore(path=str(tmp_path / "storage.json"))
