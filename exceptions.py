# ============================================================================
# EXCEPTIONS
# ============================================================================
# STATUS: Shared - used by every layer
# PURPOSE: Exception hierarchy separating contract violations from pipeline failures
# EXPORTS: ContractViolationError, CatalogIngestError, ArchiveFormatError,
#          ValidationError, MetadataEvalError, AllocationFetchError,
#          UploadError, RecordWriteError, ConfigurationError
# DEPENDENCIES: None (standard library only)
# ============================================================================

"""
Custom Exception Hierarchy

Distinguishes between:
1. Contract Violations (programming bugs that need fixing)
2. Pipeline Failures (expected runtime issues with a bad archive or backend)

Every pipeline failure is terminal for the invocation. None are retried
internally; the trigger boundary logs them and converts them into the
500 response.
"""

from typing import Optional


class ContractViolationError(TypeError):
    """
    Raised when component contracts are violated (programming bugs).

    These indicate:
    - Wrong types passed across a component seam
    - Repository handed something other than a CatalogRecord

    These should NEVER be caught and handled - they indicate bugs
    that need to be fixed in the code.
    """
    pass


class CatalogIngestError(Exception):
    """
    Base class for expected archive ingestion failures.

    Attributes:
        stage: Pipeline stage that failed (IngestStage value)
        cause: Underlying exception, if any
    """

    default_stage = "failed"

    def __init__(self, message: str, stage: Optional[str] = None,
                 cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage
        self.cause = cause

    def __str__(self) -> str:
        return self.message


class ArchiveFormatError(CatalogIngestError):
    """
    Uploaded bytes are not a readable zip archive.

    Examples:
        - Truncated upload
        - Not a zip container at all
        - Declared uncompressed size over the configured limit
    """
    default_stage = "received"


class ValidationError(CatalogIngestError):
    """
    Archive content failed business validation.

    Examples:
        - No metadata script in the archive
        - Metadata script present but zero classified media assets
        - Catalog entry without a usable Name
        - Trigger payload that names no archive
    """
    default_stage = "classified"


class MetadataEvalError(CatalogIngestError):
    """
    Sandboxed evaluation of the metadata script failed.

    Examples:
        - Script throws (syntax error, ReferenceError on host objects)
        - Script exceeds the time or memory limit
        - Well-known symbol absent or not an array of objects
    """
    default_stage = "evaluated"


class AllocationFetchError(CatalogIngestError):
    """
    Reading the identifier high-water-mark from the catalog table failed.
    """
    default_stage = "allocated"


class UploadError(CatalogIngestError):
    """
    Uploading a matched media asset to destination storage failed.
    """
    default_stage = "persisting"


class RecordWriteError(CatalogIngestError):
    """
    Writing a catalog record to the table store failed.
    """
    default_stage = "persisting"


class ConfigurationError(Exception):
    """
    System configuration error.

    These are typically fatal and indicate misconfiguration
    that prevents the system from operating.

    Examples:
        - Missing storage account name and connection string
        - Non-numeric sandbox limits in the environment
    """
    pass
