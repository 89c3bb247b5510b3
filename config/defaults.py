"""
Configuration Defaults - Single source of truth for all default values.

FAIL-FAST DESIGN:
The storage account default is an INTENTIONALLY INVALID placeholder.
Deployments fail loudly if neither STORAGE_ACCOUNT_NAME nor a connection
string is set.

Organization:
    - StorageDefaults: account placeholder and container names
    - CatalogDefaults: table layout and archive naming conventions
    - SandboxDefaults: metadata script evaluation limits
    - ArchiveDefaults: decompression limits
    - AppDefaults: environment, debug and logging

Usage:
    from config.defaults import CatalogDefaults

    table_name: str = Field(default=CatalogDefaults.TABLE_NAME, ...)
"""


# =============================================================================
# STORAGE DEFAULTS
# =============================================================================

class StorageDefaults:
    """
    Blob Storage defaults.

    DEFAULT_ACCOUNT_NAME MUST be overridden via STORAGE_ACCOUNT_NAME
    (or CATALOG_STORAGE_CONNECTION_STRING).
    """

    DEFAULT_ACCOUNT_NAME = "your-storage-account"

    SOURCE_CONTAINER = "catalog-source"
    DESTINATION_CONTAINER = "catalog-media"


# =============================================================================
# CATALOG DEFAULTS
# =============================================================================

class CatalogDefaults:
    """
    Catalog table layout and archive naming conventions.

    The field names match the records already present in the Movies table.
    """

    TABLE_NAME = "Movies"
    PARTITION_KEY = "movies"

    IDENTIFIER_FIELD = "Movie_ID"
    IMAGE_REFERENCE_FIELD = "Image_url"
    VIDEO_REFERENCE_FIELD = "Video_url"
    NAME_FIELD = "Name"
    NAME_SEPARATOR = "_"

    METADATA_EXTENSION = ".js"
    METADATA_SYMBOL = "testArray"

    IMAGE_FOLDER_MARKER = "Poster_Images"
    VIDEO_FOLDER_MARKER = "Movie_Videos"

    IMAGE_CONTENT_TYPES = {
        ".png": "image/png",
        ".jpg": "image/jpeg",
        ".jpeg": "image/jpeg",
    }

    VIDEO_CONTENT_TYPES = {
        ".mp4": "video/mp4",
        ".mov": "video/quicktime",
        ".avi": "video/x-msvideo",
    }


# =============================================================================
# SANDBOX DEFAULTS
# =============================================================================

class SandboxDefaults:
    """Limits applied to every metadata script evaluation."""

    EVAL_TIMEOUT_SECONDS = 5.0
    MAX_MEMORY_BYTES = 64 * 1024 * 1024
    MAX_SCRIPT_BYTES = 1024 * 1024


# =============================================================================
# ARCHIVE DEFAULTS
# =============================================================================

class ArchiveDefaults:
    """Decompression limits for uploaded archives."""

    MAX_UNCOMPRESSED_BYTES = 2 * 1024 * 1024 * 1024


# =============================================================================
# APPLICATION DEFAULTS
# =============================================================================

class AppDefaults:
    """Core application settings."""

    DEBUG_MODE = False
    ENVIRONMENT = "dev"
    LOG_LEVEL = "INFO"
