"""
Main Application Configuration.

Composes domain-specific configuration modules:
    - StorageConfig (account, source and destination containers)
    - CatalogConfig (table layout, archive naming conventions)
    - SandboxConfig (metadata script limits)
    - ArchiveConfig (decompression limits)

Exports:
    AppConfig: Main configuration class

Dependencies:
    pydantic: BaseModel for configuration validation
    config.storage_config: StorageConfig
    config.catalog_config: CatalogConfig, SandboxConfig, ArchiveConfig
    config.defaults: Default value constants

Pattern:
    Composition over inheritance - domain configs are composed, not inherited.
    The composed AppConfig is what the pipeline receives at construction time,
    so nothing below the trigger layer reads the environment.
"""

import os
from pydantic import BaseModel, Field

from .storage_config import StorageConfig
from .catalog_config import CatalogConfig, SandboxConfig, ArchiveConfig
from .defaults import AppDefaults


# ============================================================================
# APPLICATION CONFIGURATION
# ============================================================================

class AppConfig(BaseModel):
    """
    Application configuration - composition of domain configs.
    """

    # ========================================================================
    # Core Application Settings
    # ========================================================================

    debug_mode: bool = Field(
        default=AppDefaults.DEBUG_MODE,
        description="Enable debug mode for verbose diagnostics. "
                    "Set DEBUG_MODE=true in environment to enable.",
        examples=[True, False]
    )

    environment: str = Field(
        default=AppDefaults.ENVIRONMENT,
        description="Environment name (dev, qa, prod)",
        examples=["dev", "qa", "prod"]
    )

    log_level: str = Field(
        default=AppDefaults.LOG_LEVEL,
        description="Logging level for application diagnostics",
        examples=["DEBUG", "INFO", "WARNING", "ERROR"]
    )

    # ========================================================================
    # Domain Configurations
    # ========================================================================

    storage: StorageConfig = Field(default_factory=StorageConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    sandbox: SandboxConfig = Field(default_factory=SandboxConfig)
    archive: ArchiveConfig = Field(default_factory=ArchiveConfig)

    # ========================================================================
    # Convenience accessors
    # ========================================================================

    @property
    def storage_account_name(self) -> str:
        return self.storage.storage_account_name

    @property
    def source_container(self) -> str:
        return self.storage.source_container

    @property
    def destination_container(self) -> str:
        return self.storage.destination_container

    @property
    def table_name(self) -> str:
        return self.catalog.table_name

    @classmethod
    def from_environment(cls) -> "AppConfig":
        """Load all configs from environment."""
        return cls(
            debug_mode=os.environ.get("DEBUG_MODE", str(AppDefaults.DEBUG_MODE).lower()).lower() == "true",
            environment=os.environ.get("ENVIRONMENT", AppDefaults.ENVIRONMENT),
            log_level=os.environ.get("LOG_LEVEL", AppDefaults.LOG_LEVEL),

            storage=StorageConfig.from_environment(),
            catalog=CatalogConfig.from_environment(),
            sandbox=SandboxConfig.from_environment(),
            archive=ArchiveConfig.from_environment(),
        )
