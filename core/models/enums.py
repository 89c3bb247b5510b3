# ============================================================================
# ENUMERATIONS
# ============================================================================
# STATUS: Core models - pure enumeration types
# PURPOSE: Asset categories and per-invocation pipeline stages
# EXPORTS: AssetKind, IngestStage
# DEPENDENCIES: enum
# ============================================================================
"""
Pure Enumeration Types for the Catalog Pipeline.

No business logic - pure type definitions only.

Exports:
    AssetKind: Media asset category
    IngestStage: Per-invocation pipeline stage
"""

from enum import Enum


class AssetKind(str, Enum):
    """Category of a classified media asset."""

    IMAGE = "image"
    VIDEO = "video"


class IngestStage(str, Enum):
    """
    Stages of one archive invocation.

    State transitions:
    - RECEIVED -> UNPACKED -> EVALUATED -> CLASSIFIED -> ALLOCATED
      -> PERSISTING -> COMPLETED (normal flow)
    - any non-terminal stage -> FAILED
    """

    RECEIVED = "received"
    UNPACKED = "unpacked"
    EVALUATED = "evaluated"
    CLASSIFIED = "classified"
    ALLOCATED = "allocated"
    PERSISTING = "persisting"
    COMPLETED = "completed"
    FAILED = "failed"
