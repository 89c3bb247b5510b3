# ============================================================================
# STORAGE CONFIGURATION
# ============================================================================
# STATUS: Config - Azure Storage endpoints for the catalog pipeline
# PURPOSE: Storage account, source container and destination container
# EXPORTS: StorageConfig
# PYDANTIC_MODELS: StorageConfig
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables (STORAGE_ACCOUNT_NAME, CATALOG_SOURCE_CONTAINER,
#         CATALOG_DESTINATION_CONTAINER, CATALOG_STORAGE_CONNECTION_STRING)
# ============================================================================

"""
Azure Storage Configuration.

One storage account hosts both blob containers (archive source and media
destination) and the catalog table. Authentication is DefaultAzureCredential
unless a connection string is configured, which is the usual setup for
Azurite during local development.
"""

import os
from typing import Optional
from pydantic import BaseModel, Field

from .defaults import StorageDefaults


class StorageConfig(BaseModel):
    """
    Storage endpoints for the catalog pipeline.

    Attributes:
        storage_account_name: Account hosting containers and the table
        connection_string: Optional connection string (overrides credential auth)
        source_container: Container archives are uploaded to
        destination_container: Container processed media is written to
    """

    storage_account_name: str = Field(
        default=StorageDefaults.DEFAULT_ACCOUNT_NAME,
        description="Azure Storage account name (STORAGE_ACCOUNT_NAME)"
    )

    connection_string: Optional[str] = Field(
        default=None,
        repr=False,
        description="Storage connection string; when set, used instead of DefaultAzureCredential"
    )

    source_container: str = Field(
        default=StorageDefaults.SOURCE_CONTAINER,
        description="Container that receives uploaded catalog archives"
    )

    destination_container: str = Field(
        default=StorageDefaults.DESTINATION_CONTAINER,
        description="Container that receives processed media assets"
    )

    @property
    def blob_account_url(self) -> str:
        """Blob service endpoint for the configured account."""
        return f"https://{self.storage_account_name}.blob.core.windows.net"

    @property
    def table_account_url(self) -> str:
        """Table service endpoint for the configured account."""
        return f"https://{self.storage_account_name}.table.core.windows.net"

    @property
    def is_placeholder(self) -> bool:
        """True when neither an account name nor a connection string was provided."""
        return (
            self.storage_account_name == StorageDefaults.DEFAULT_ACCOUNT_NAME
            and not self.connection_string
        )

    def debug_dict(self) -> dict:
        """Sanitised view for diagnostics (connection string masked)."""
        return {
            'storage_account_name': self.storage_account_name,
            'connection_string': '***MASKED***' if self.connection_string else None,
            'source_container': self.source_container,
            'destination_container': self.destination_container,
        }

    @classmethod
    def from_environment(cls) -> "StorageConfig":
        """Load from environment variables."""
        return cls(
            storage_account_name=os.environ.get("STORAGE_ACCOUNT_NAME", StorageDefaults.DEFAULT_ACCOUNT_NAME),
            connection_string=os.environ.get("CATALOG_STORAGE_CONNECTION_STRING") or None,
            source_container=os.environ.get("CATALOG_SOURCE_CONTAINER", StorageDefaults.SOURCE_CONTAINER),
            destination_container=os.environ.get("CATALOG_DESTINATION_CONTAINER", StorageDefaults.DESTINATION_CONTAINER),
        )
