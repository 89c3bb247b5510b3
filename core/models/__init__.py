"""
Core Data Models Package.

Contains pure data structures without business logic.

Exports:
    AssetKind, IngestStage: Enums
    CatalogEntry, ClassifiedAsset, CatalogAssignment, CatalogRecord: Catalog models
    IngestResult: Invocation outcome
    ContentSource: Lazy content accessor protocol
"""

from .enums import (
    AssetKind,
    IngestStage
)

from .catalog import (
    CatalogEntry,
    ClassifiedAsset,
    CatalogAssignment,
    CatalogRecord,
    IngestResult,
    ContentSource,
    RESERVED_ENTITY_KEYS,
    SUCCESS_MESSAGE,
    FAILURE_MESSAGE,
)

__all__ = [
    'AssetKind',
    'IngestStage',
    'CatalogEntry',
    'ClassifiedAsset',
    'CatalogAssignment',
    'CatalogRecord',
    'IngestResult',
    'ContentSource',
    'RESERVED_ENTITY_KEYS',
    'SUCCESS_MESSAGE',
    'FAILURE_MESSAGE',
]
