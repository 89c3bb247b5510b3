# ============================================================================
# CATALOG CONFIGURATION
# ============================================================================
# STATUS: Config - Catalog table layout, archive conventions, sandbox limits
# PURPOSE: Everything the ingest pipeline needs to know besides storage endpoints
# EXPORTS: CatalogConfig, SandboxConfig, ArchiveConfig
# PYDANTIC_MODELS: CatalogConfig, SandboxConfig, ArchiveConfig
# DEPENDENCIES: pydantic, os
# SOURCE: Environment variables (CATALOG_*, SANDBOX_*, ARCHIVE_*)
# ============================================================================

"""
Catalog Configuration.

Naming conventions for the uploaded archives (metadata script extension,
media folder markers) and the layout of the catalog table live here so
the pipeline itself carries no hard-coded container or field names.
"""

import os
from typing import Dict, Union
from pydantic import BaseModel, Field, field_validator

from exceptions import ConfigurationError
from .defaults import CatalogDefaults, SandboxDefaults, ArchiveDefaults


def _env_number(name: str, default: Union[int, float], cast=int) -> Union[int, float]:
    """Read a numeric environment variable, failing loudly on garbage."""
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be numeric, got {raw!r}") from e


# ============================================================================
# CATALOG TABLE + ARCHIVE CONVENTIONS
# ============================================================================

class CatalogConfig(BaseModel):
    """
    Catalog table layout and archive naming conventions.

    Extension maps are keyed by lowercase extension including the dot.
    """

    table_name: str = Field(default=CatalogDefaults.TABLE_NAME)
    partition_key: str = Field(default=CatalogDefaults.PARTITION_KEY)

    identifier_field: str = Field(default=CatalogDefaults.IDENTIFIER_FIELD)
    image_reference_field: str = Field(default=CatalogDefaults.IMAGE_REFERENCE_FIELD)
    video_reference_field: str = Field(default=CatalogDefaults.VIDEO_REFERENCE_FIELD)
    name_field: str = Field(default=CatalogDefaults.NAME_FIELD)
    name_separator: str = Field(default=CatalogDefaults.NAME_SEPARATOR, min_length=1)

    metadata_extension: str = Field(default=CatalogDefaults.METADATA_EXTENSION)
    metadata_symbol: str = Field(
        default=CatalogDefaults.METADATA_SYMBOL,
        pattern=r"^[A-Za-z_$][A-Za-z0-9_$]*$",
        description="Top-level identifier the metadata script binds to the entry array"
    )

    image_folder_marker: str = Field(default=CatalogDefaults.IMAGE_FOLDER_MARKER)
    video_folder_marker: str = Field(default=CatalogDefaults.VIDEO_FOLDER_MARKER)

    image_content_types: Dict[str, str] = Field(
        default_factory=lambda: dict(CatalogDefaults.IMAGE_CONTENT_TYPES)
    )
    video_content_types: Dict[str, str] = Field(
        default_factory=lambda: dict(CatalogDefaults.VIDEO_CONTENT_TYPES)
    )

    @field_validator("metadata_extension")
    @classmethod
    def _dotted_lowercase(cls, value: str) -> str:
        value = value.strip().lower()
        return value if value.startswith(".") else f".{value}"

    @field_validator("image_content_types", "video_content_types")
    @classmethod
    def _lowercase_keys(cls, value: Dict[str, str]) -> Dict[str, str]:
        return {
            (ext.lower() if ext.startswith(".") else f".{ext.lower()}"): content_type
            for ext, content_type in value.items()
        }

    @classmethod
    def from_environment(cls) -> "CatalogConfig":
        """Load from environment variables."""
        return cls(
            table_name=os.environ.get("CATALOG_TABLE_NAME", CatalogDefaults.TABLE_NAME),
            partition_key=os.environ.get("CATALOG_PARTITION_KEY", CatalogDefaults.PARTITION_KEY),
            identifier_field=os.environ.get("CATALOG_IDENTIFIER_FIELD", CatalogDefaults.IDENTIFIER_FIELD),
            metadata_extension=os.environ.get("CATALOG_METADATA_EXTENSION", CatalogDefaults.METADATA_EXTENSION),
            metadata_symbol=os.environ.get("CATALOG_METADATA_SYMBOL", CatalogDefaults.METADATA_SYMBOL),
            image_folder_marker=os.environ.get("CATALOG_IMAGE_FOLDER", CatalogDefaults.IMAGE_FOLDER_MARKER),
            video_folder_marker=os.environ.get("CATALOG_VIDEO_FOLDER", CatalogDefaults.VIDEO_FOLDER_MARKER),
        )


# ============================================================================
# METADATA SANDBOX LIMITS
# ============================================================================

class SandboxConfig(BaseModel):
    """Resource limits for metadata script evaluation."""

    eval_timeout_seconds: float = Field(default=SandboxDefaults.EVAL_TIMEOUT_SECONDS, gt=0)
    max_memory_bytes: int = Field(default=SandboxDefaults.MAX_MEMORY_BYTES, gt=0)
    max_script_bytes: int = Field(default=SandboxDefaults.MAX_SCRIPT_BYTES, gt=0)

    @classmethod
    def from_environment(cls) -> "SandboxConfig":
        """Load from environment variables."""
        return cls(
            eval_timeout_seconds=_env_number(
                "SANDBOX_EVAL_TIMEOUT_SECONDS", SandboxDefaults.EVAL_TIMEOUT_SECONDS, float
            ),
            max_memory_bytes=_env_number("SANDBOX_MAX_MEMORY_BYTES", SandboxDefaults.MAX_MEMORY_BYTES),
            max_script_bytes=_env_number("SANDBOX_MAX_SCRIPT_BYTES", SandboxDefaults.MAX_SCRIPT_BYTES),
        )


# ============================================================================
# ARCHIVE LIMITS
# ============================================================================

class ArchiveConfig(BaseModel):
    """Decompression limits for uploaded archives."""

    max_uncompressed_bytes: int = Field(default=ArchiveDefaults.MAX_UNCOMPRESSED_BYTES, gt=0)

    @classmethod
    def from_environment(cls) -> "ArchiveConfig":
        """Load from environment variables."""
        return cls(
            max_uncompressed_bytes=_env_number(
                "ARCHIVE_MAX_UNCOMPRESSED_BYTES", ArchiveDefaults.MAX_UNCOMPRESSED_BYTES
            ),
        )
