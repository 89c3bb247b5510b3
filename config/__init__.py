# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Config - package exports and singleton
# PURPOSE: Single entry point for application configuration
# EXPORTS: AppConfig, StorageConfig, CatalogConfig, SandboxConfig, ArchiveConfig,
#          get_config, reset_config, debug_config
# PYDANTIC_MODELS: AppConfig, StorageConfig, CatalogConfig, SandboxConfig, ArchiveConfig
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── storage_config.py        # Account and container names
    ├── catalog_config.py        # Table layout, archive conventions, limits
    └── defaults.py              # Default values

Usage:
    # Singleton pattern (trigger layer only)
    from config import get_config
    config = get_config()
    table = config.catalog.table_name

    # Debug output
    from config import debug_config
    info = debug_config()  # Connection strings masked
"""

from typing import Optional

from .storage_config import StorageConfig
from .catalog_config import CatalogConfig, SandboxConfig, ArchiveConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging (masks sensitive values).

    Returns:
        Dictionary with configuration values, connection strings masked
    """
    try:
        config = get_config()
        return {
            'storage': config.storage.debug_dict(),
            'catalog': {
                'table_name': config.catalog.table_name,
                'partition_key': config.catalog.partition_key,
                'identifier_field': config.catalog.identifier_field,
                'metadata_extension': config.catalog.metadata_extension,
                'metadata_symbol': config.catalog.metadata_symbol,
                'image_folder_marker': config.catalog.image_folder_marker,
                'video_folder_marker': config.catalog.video_folder_marker,
            },
            'sandbox': config.sandbox.model_dump(),
            'archive': config.archive.model_dump(),
            'debug_mode': config.debug_mode,
            'environment': config.environment,
            'log_level': config.log_level,
        }
    except Exception as e:
        return {'error': f'Configuration validation failed: {e}'}


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'AppConfig',
    'get_config',
    'reset_config',
    'debug_config',
    'StorageConfig',
    'CatalogConfig',
    'SandboxConfig',
    'ArchiveConfig',
]
