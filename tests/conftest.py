"""
Root conftest.py — sys.path, env vars, shared fixtures.

Sets up the test environment so all production code can be imported
without Azure credentials. Storage is replaced by the in-memory
repositories from tests/factories.
"""

import os
import sys

import pytest

# Add project root to sys.path so 'core', 'config', 'services', etc. are importable
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture(autouse=True, scope="session")
def set_minimal_env_vars():
    """
    Set minimal environment variables to prevent import crashes.

    Config is read lazily, but the singleton may be touched by trigger
    tests, so provide safe defaults.
    """
    defaults = {
        "STORAGE_ACCOUNT_NAME": "testaccount",
        "CATALOG_SOURCE_CONTAINER": "catalog-source",
        "CATALOG_DESTINATION_CONTAINER": "catalog-media",
        "ENVIRONMENT": "dev",
    }
    for key, value in defaults.items():
        os.environ.setdefault(key, value)


@pytest.fixture
def app_config():
    """Default configuration, independent of the process environment."""
    from config import AppConfig
    return AppConfig()


@pytest.fixture
def blob_repo():
    from tests.factories.archive_factories import InMemoryBlobRepository
    return InMemoryBlobRepository()


@pytest.fixture
def catalog_table():
    from tests.factories.archive_factories import InMemoryCatalogTable
    return InMemoryCatalogTable()


@pytest.fixture
def make_service(app_config):
    """Factory fixture: CatalogIngestService over the given fakes."""
    from services import CatalogIngestService

    def _make(blob_repository, table_repository, config=None):
        return CatalogIngestService(config or app_config, blob_repository, table_repository)
    return _make
