# ============================================================================
# BLOB REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Blob Storage repository
# PURPOSE: Archive download and media upload with managed authentication
# EXPORTS: IBlobRepository, BlobRepository
# INTERFACES: IBlobRepository for dependency injection
# DEPENDENCIES: azure-storage-blob, azure-identity, config
# SCOPE: Source archive container (read) and destination media container (write)
# PATTERNS: Repository, DefaultAzureCredential, container client caching
# ============================================================================

"""
Blob Storage Repository.

Single point of authentication for blob operations. Uses
DefaultAzureCredential unless a connection string is configured (Azurite
and local development).

Authentication Hierarchy (DefaultAzureCredential):
1. Environment variables (AZURE_CLIENT_ID, etc.)
2. Managed Identity (in Azure)
3. Azure CLI (local development)

Usage:
    from infrastructure import RepositoryFactory

    blob_repo = RepositoryFactory.create_blob_repository(config.storage)
    data = blob_repo.read_blob('catalog-source', 'uploads/batch-01.zip')
"""

# ============================================================================
# IMPORTS - Top of file for fail-fast behavior
# ============================================================================

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union, BinaryIO

from azure.storage.blob import BlobServiceClient, ContainerClient, ContentSettings
from azure.identity import DefaultAzureCredential
from azure.core.exceptions import ResourceNotFoundError

from config import StorageConfig
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "BlobRepository")


# ============================================================================
# BLOB REPOSITORY INTERFACE
# ============================================================================

class IBlobRepository(ABC):
    """
    Interface for blob storage operations.

    Enables dependency injection and testing/mocking of blob operations.
    """

    @abstractmethod
    def read_blob(self, container: str, blob_path: str) -> bytes:
        """Read entire blob to memory"""
        pass

    @abstractmethod
    def write_blob(self, container: str, blob_path: str, data: Union[bytes, BinaryIO],
                   overwrite: bool = True, content_type: str = "application/octet-stream",
                   metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """Write blob from bytes or stream; result includes the blob 'url'"""
        pass


# ============================================================================
# BLOB REPOSITORY IMPLEMENTATION
# ============================================================================

class BlobRepository(IBlobRepository):
    """
    Azure Blob Storage repository with managed authentication.

    Container clients are cached per container name for connection reuse.
    """

    def __init__(self, storage: StorageConfig,
                 blob_service: Optional[BlobServiceClient] = None):
        """
        Initialize from storage configuration.

        Args:
            storage: Account name / connection string
            blob_service: Pre-built client (tests, custom pipelines)
        """
        try:
            if blob_service is not None:
                self.blob_service = blob_service
            elif storage.connection_string:
                logger.info("Initializing BlobRepository with connection string")
                self.blob_service = BlobServiceClient.from_connection_string(storage.connection_string)
            else:
                logger.info(
                    f"Initializing BlobRepository with DefaultAzureCredential "
                    f"for account: {storage.storage_account_name}"
                )
                self.blob_service = BlobServiceClient(
                    account_url=storage.blob_account_url,
                    credential=DefaultAzureCredential()
                )
        except Exception as e:
            logger.error(f"Failed to initialize BlobRepository: {e}")
            raise

        self.storage_account = self.blob_service.account_name
        self._container_clients: Dict[str, ContainerClient] = {}

    def _get_container_client(self, container: str) -> ContainerClient:
        """Get or create cached container client."""
        if container not in self._container_clients:
            self._container_clients[container] = self.blob_service.get_container_client(container)
            logger.debug(f"Created new container client for: {container}")
        return self._container_clients[container]

    # ========================================================================
    # CORE BLOB OPERATIONS
    # ========================================================================

    def read_blob(self, container: str, blob_path: str) -> bytes:
        """
        Read entire blob to memory.

        Args:
            container: Container name
            blob_path: Path to blob

        Returns:
            Blob content as bytes

        Raises:
            ResourceNotFoundError: If blob doesn't exist (surfaced unmodified)
        """
        try:
            blob_client = self._get_container_client(container).get_blob_client(blob_path)

            logger.debug(f"Reading blob: {container}/{blob_path}")
            data = blob_client.download_blob().readall()

            logger.debug(f"Successfully read {len(data)} bytes from {container}/{blob_path}")
            return data

        except ResourceNotFoundError:
            logger.error(f"Blob not found: {container}/{blob_path}")
            raise
        except Exception as e:
            logger.error(f"Failed to read blob {container}/{blob_path}: {e}")
            raise

    def write_blob(self, container: str, blob_path: str, data: Union[bytes, BinaryIO],
                   overwrite: bool = True, content_type: str = "application/octet-stream",
                   metadata: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        Write blob from bytes or stream.

        Args:
            container: Container name
            blob_path: Path for blob
            data: Bytes or stream to write
            overwrite: Whether to overwrite existing blob
            content_type: MIME type for blob
            metadata: Optional metadata dictionary

        Returns:
            Dict with container, blob_path, url, size, etag
        """
        try:
            blob_client = self._get_container_client(container).get_blob_client(blob_path)

            logger.debug(f"Writing blob: {container}/{blob_path} (overwrite={overwrite})")

            response = blob_client.upload_blob(
                data,
                overwrite=overwrite,
                content_settings=ContentSettings(content_type=content_type),
                metadata=metadata or {}
            )

            size = len(data) if isinstance(data, (bytes, bytearray)) else None
            result = {
                'container': container,
                'blob_path': blob_path,
                'url': blob_client.url,
                'size': size,
                'etag': response.get('etag') if response else None,
            }

            logger.info(f"✅ Wrote blob: {container}/{blob_path} ({size} bytes, {content_type})")
            return result

        except Exception as e:
            logger.error(f"Failed to write blob {container}/{blob_path}: {e}")
            raise
