# ============================================================================
# REPOSITORY FACTORY
# ============================================================================
# STATUS: Infrastructure - Central factory for repository instances
# PURPOSE: Build blob and catalog table repositories from configuration
# EXPORTS: RepositoryFactory
# INTERFACES: Creates IBlobRepository and ICatalogTableRepository implementations
# DEPENDENCIES: infrastructure.blob, infrastructure.catalog_table, config
# ============================================================================

"""
Repository Factory - Central Creation Point

Single place where storage clients are created. Both repositories are
built from the same StorageConfig so they always point at the same
account.
"""

from config import AppConfig, StorageConfig, CatalogConfig
from exceptions import ConfigurationError
from util_logger import LoggerFactory, ComponentType, log_exceptions

logger = LoggerFactory.create_logger(ComponentType.FACTORY, "RepositoryFactory")


class RepositoryFactory:
    """Factory for creating repository instances."""

    @staticmethod
    def create_blob_repository(storage: StorageConfig) -> 'BlobRepository':
        """
        Create blob storage repository with authentication.

        Args:
            storage: Storage endpoints and credentials

        Returns:
            BlobRepository instance
        """
        from .blob import BlobRepository

        logger.info("🏭 Creating Blob Storage repository")
        logger.debug(f"  Storage account: {storage.storage_account_name}")
        logger.debug(f"  Connection string configured: {bool(storage.connection_string)}")

        return BlobRepository(storage)

    @staticmethod
    def create_catalog_table_repository(storage: StorageConfig, catalog: CatalogConfig,
                                        ensure_table: bool = True) -> 'CatalogTableRepository':
        """
        Create the catalog table repository.

        Args:
            storage: Storage endpoints and credentials
            catalog: Table name and field layout
            ensure_table: Create the table if missing

        Returns:
            CatalogTableRepository instance
        """
        from .catalog_table import CatalogTableRepository

        logger.info(f"🏭 Creating catalog table repository for table: {catalog.table_name}")
        repository = CatalogTableRepository(storage, catalog)
        if ensure_table:
            repository.ensure_table_exists()
        return repository

    @classmethod
    @log_exceptions(ComponentType.FACTORY, "RepositoryFactory")
    def create_repositories(cls, config: AppConfig,
                            ensure_table: bool = True) -> dict:
        """
        Create every repository the ingest pipeline needs.

        Returns:
            {'blob': BlobRepository, 'catalog_table': CatalogTableRepository}

        Raises:
            ConfigurationError: No storage account name or connection string
        """
        if config.storage.is_placeholder:
            raise ConfigurationError(
                "Storage is not configured: set STORAGE_ACCOUNT_NAME or "
                "CATALOG_STORAGE_CONNECTION_STRING"
            )

        return {
            'blob': cls.create_blob_repository(config.storage),
            'catalog_table': cls.create_catalog_table_repository(
                config.storage, config.catalog, ensure_table=ensure_table
            ),
        }
