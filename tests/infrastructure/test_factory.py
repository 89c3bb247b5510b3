"""
RepositoryFactory tests — client construction is patched out.
"""

from unittest.mock import patch

import pytest

from config import AppConfig, StorageConfig
from exceptions import ConfigurationError
from infrastructure import RepositoryFactory


def _configured() -> AppConfig:
    return AppConfig(storage=StorageConfig(storage_account_name="testaccount"))


class TestRepositoryFactory:

    @patch("infrastructure.catalog_table.CatalogTableRepository")
    @patch("infrastructure.blob.BlobRepository")
    def test_create_repositories(self, blob_cls, table_cls):
        config = _configured()
        repos = RepositoryFactory.create_repositories(config)

        blob_cls.assert_called_once_with(config.storage)
        table_cls.assert_called_once_with(config.storage, config.catalog)
        table_cls.return_value.ensure_table_exists.assert_called_once_with()
        assert repos == {'blob': blob_cls.return_value, 'catalog_table': table_cls.return_value}

    @patch("infrastructure.catalog_table.CatalogTableRepository")
    @patch("infrastructure.blob.BlobRepository")
    def test_placeholder_storage_fails_fast(self, blob_cls, table_cls):
        with pytest.raises(ConfigurationError, match="STORAGE_ACCOUNT_NAME"):
            RepositoryFactory.create_repositories(AppConfig())

        blob_cls.assert_not_called()
        table_cls.assert_not_called()

    @patch("infrastructure.catalog_table.CatalogTableRepository")
    @patch("infrastructure.blob.BlobRepository")
    def test_connection_string_is_enough(self, blob_cls, table_cls):
        config = AppConfig(storage=StorageConfig(connection_string="UseDevelopmentStorage=true"))
        RepositoryFactory.create_repositories(config, ensure_table=False)
        blob_cls.assert_called_once_with(config.storage)

    @patch("infrastructure.catalog_table.CatalogTableRepository")
    def test_table_creation_optional(self, table_cls):
        config = _configured()
        RepositoryFactory.create_catalog_table_repository(config.storage, config.catalog, ensure_table=False)
        table_cls.return_value.ensure_table_exists.assert_not_called()
