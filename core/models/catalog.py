# ============================================================================
# CATALOG MODELS
# ============================================================================
# STATUS: Core - data structures for one archive invocation
# PURPOSE: Catalog entries, classified assets, assignments, records, results
# EXPORTS: CatalogEntry, ClassifiedAsset, CatalogAssignment, CatalogRecord,
#          IngestResult, ContentSource
# DEPENDENCIES: pydantic, dataclasses, json
# ============================================================================
"""
Catalog Models.

Lifecycle within one invocation:
    CatalogEntry (evaluated from the metadata script, immutable)
      + ClassifiedAsset (derived from archive entries, never persisted)
      -> CatalogAssignment (entry + identifier + matched assets)
      -> CatalogRecord (entry fields + identifier + asset references, persisted once)

IngestResult is the invocation outcome rendered at the trigger boundary.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .enums import AssetKind, IngestStage


# Azure Table system properties; entry fields never overwrite these
RESERVED_ENTITY_KEYS = frozenset({"PartitionKey", "RowKey", "Timestamp"})

SUCCESS_MESSAGE = "Items processed successfully."
FAILURE_MESSAGE = "Failed to process item."


class ContentSource(Protocol):
    """Anything that can hand back an archive member's content on demand."""

    path: str

    def read_bytes(self) -> bytes: ...

    def read_text(self) -> str: ...


# ============================================================================
# CATALOG ENTRY
# ============================================================================

class CatalogEntry(BaseModel):
    """
    One catalog item as produced by the metadata script.

    Fields pass through verbatim (insertion order preserved) into the
    final record. The position in the evaluated sequence determines the
    identifier.
    """

    model_config = ConfigDict(frozen=True)

    position: int = Field(ge=0, description="Zero-based position in the evaluated sequence")
    fields: Dict[str, Any] = Field(default_factory=dict)

    def get(self, key: str, default: Any = None) -> Any:
        return self.fields.get(key, default)


# ============================================================================
# CLASSIFIED ASSET
# ============================================================================

@dataclass(frozen=True)
class ClassifiedAsset:
    """
    A media file recognised by folder marker and extension.

    The content accessor stays lazy: bytes are only decompressed when the
    asset is uploaded.
    """

    kind: AssetKind
    path: str
    content_type: str
    source: ContentSource = field(repr=False, compare=False)

    @property
    def filename(self) -> str:
        """Basename of the archive path."""
        return self.path.rsplit("/", 1)[-1]

    def read_bytes(self) -> bytes:
        return self.source.read_bytes()


# ============================================================================
# ASSIGNMENT (entry + identifier + matched assets)
# ============================================================================

@dataclass(frozen=True)
class CatalogAssignment:
    """A catalog entry paired with its identifier and matched assets."""

    entry: CatalogEntry
    identifier: int
    normalized_name: str
    images: Tuple[ClassifiedAsset, ...] = ()
    videos: Tuple[ClassifiedAsset, ...] = ()

    def destination_key(self, asset: ClassifiedAsset) -> str:
        """Destination blob key: <normalized-name>/<archive-path>."""
        return f"{self.normalized_name}/{asset.path}"


# ============================================================================
# CATALOG RECORD (persisted)
# ============================================================================

class CatalogRecord(BaseModel):
    """
    Catalog entry enriched with identifier and asset references.

    Written once to the table store; immutable thereafter.
    """

    model_config = ConfigDict(frozen=True)

    identifier: int = Field(ge=1)
    fields: Dict[str, Any] = Field(default_factory=dict)
    image_references: List[str] = Field(default_factory=list)
    video_references: List[str] = Field(default_factory=list)

    @staticmethod
    def row_key_for(identifier: int) -> str:
        """Zero-padded so RowKey order matches numeric order."""
        return f"{identifier:010d}"

    def to_entity(self, partition_key: str, identifier_field: str,
                  image_field: str, video_field: str) -> Dict[str, Any]:
        """
        Render as an Azure Table entity.

        Table properties cannot hold lists or nested objects, so those are
        JSON-encoded the same way the reference lists are. None values are
        dropped. Pipeline-owned properties override same-named entry fields.
        """
        entity: Dict[str, Any] = {}
        for key, value in self.fields.items():
            if key in RESERVED_ENTITY_KEYS or value is None:
                continue
            if isinstance(value, (list, dict)):
                entity[key] = json.dumps(value, default=str)
            else:
                entity[key] = value

        entity["PartitionKey"] = partition_key
        entity["RowKey"] = self.row_key_for(self.identifier)
        entity[identifier_field] = self.identifier
        entity[image_field] = json.dumps(self.image_references)
        entity[video_field] = json.dumps(self.video_references)
        return entity


# ============================================================================
# INVOCATION RESULT
# ============================================================================

class IngestResult(BaseModel):
    """Outcome of one archive invocation."""

    status_code: int
    message: str
    error: Optional[str] = None
    stage: IngestStage
    records_written: int = 0
    assets_uploaded: int = 0
    identifiers: List[int] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.status_code == 200

    @classmethod
    def succeeded(cls, records_written: int, assets_uploaded: int,
                  identifiers: List[int]) -> "IngestResult":
        return cls(
            status_code=200,
            message=SUCCESS_MESSAGE,
            stage=IngestStage.COMPLETED,
            records_written=records_written,
            assets_uploaded=assets_uploaded,
            identifiers=identifiers,
        )

    @classmethod
    def failed(cls, error: str, stage: IngestStage, records_written: int = 0,
               assets_uploaded: int = 0) -> "IngestResult":
        return cls(
            status_code=500,
            message=FAILURE_MESSAGE,
            error=error,
            stage=stage,
            records_written=records_written,
            assets_uploaded=assets_uploaded,
        )

    def body(self) -> Dict[str, Any]:
        """JSON body: {message, error?} plus counters."""
        payload: Dict[str, Any] = {"message": self.message}
        if self.error is not None:
            payload["error"] = self.error
            payload["stage"] = self.stage.value
        payload["records_written"] = self.records_written
        payload["assets_uploaded"] = self.assets_uploaded
        if self.identifiers:
            payload["identifiers"] = self.identifiers
        return payload

    def to_response(self) -> Dict[str, Any]:
        """Structured invocation response: {statusCode, body}."""
        return {
            "statusCode": self.status_code,
            "body": json.dumps(self.body()),
        }
