"""
Config test fixtures — clean environment via monkeypatch.
"""

import pytest


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all env vars that config modules might read, for isolation."""
    env_vars_to_clear = [
        "STORAGE_ACCOUNT_NAME", "CATALOG_STORAGE_CONNECTION_STRING",
        "CATALOG_SOURCE_CONTAINER", "CATALOG_DESTINATION_CONTAINER",
        "CATALOG_TABLE_NAME", "CATALOG_PARTITION_KEY", "CATALOG_IDENTIFIER_FIELD",
        "CATALOG_METADATA_EXTENSION", "CATALOG_METADATA_SYMBOL",
        "CATALOG_IMAGE_FOLDER", "CATALOG_VIDEO_FOLDER",
        "SANDBOX_EVAL_TIMEOUT_SECONDS", "SANDBOX_MAX_MEMORY_BYTES", "SANDBOX_MAX_SCRIPT_BYTES",
        "ARCHIVE_MAX_UNCOMPRESSED_BYTES",
        "DEBUG_MODE", "ENVIRONMENT", "LOG_LEVEL",
    ]
    for var in env_vars_to_clear:
        monkeypatch.delenv(var, raising=False)

    from config import reset_config
    reset_config()
    yield monkeypatch
    reset_config()
