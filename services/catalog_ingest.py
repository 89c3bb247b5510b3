# ============================================================================
# CATALOG INGEST SERVICE
# ============================================================================
# STATUS: Service - end-to-end archive ingestion pipeline
# PURPOSE: Run one archive through unpack, evaluate, classify, allocate, persist
# EXPORTS: CatalogIngestService
# DEPENDENCIES: core (archive, metadata, classifier, matcher), infrastructure, config
# ENTRY_POINTS: CatalogIngestService.ingest(container, key)
# ============================================================================
"""
Catalog Ingest Service.

Stage machine per invocation:

    RECEIVED -> UNPACKED -> EVALUATED -> CLASSIFIED -> ALLOCATED
        -> PERSISTING (once per entry) -> COMPLETED
    any non-terminal stage -> FAILED

A missing metadata file and an archive with zero classified assets are
rejected before the high-water-mark scan. A nameless entry is rejected
before the first upload. A rejected archive never uploads or writes anything.

The service never raises for pipeline failures. Every exception is logged
with the stage it happened in and rendered as a 500 IngestResult carrying
the error message.
"""

import uuid
from typing import Optional

from config import AppConfig
from core.archive import ArchiveReader
from core.classifier import AssetClassifier
from core.logic import can_stage_transition
from core.matcher import build_assignments
from core.metadata import MetadataEvaluator
from core.models import IngestResult, IngestStage
from exceptions import (
    AllocationFetchError,
    CatalogIngestError,
    ContractViolationError,
    ValidationError,
)
from infrastructure.blob import IBlobRepository
from infrastructure.catalog_table import ICatalogTableRepository
from util_logger import LoggerFactory, ComponentType

from .catalog_persistence import CatalogPersistenceCoordinator


class _InvocationState:
    """Current stage of one invocation, advanced only along valid transitions."""

    def __init__(self, logger):
        self.stage = IngestStage.RECEIVED
        self.logger = logger

    def advance(self, target: IngestStage) -> None:
        if not can_stage_transition(self.stage, target):
            raise RuntimeError(f"Invalid stage transition {self.stage.value} -> {target.value}")
        if target != self.stage:
            self.logger.info(f"Stage {self.stage.value} -> {target.value}")
        self.stage = target


class CatalogIngestService:
    """
    Ingests one archive per call.

    Args:
        config: Application configuration
        blob_repository: Source archive reads and destination uploads
        table_repository: High-water-mark scan and record writes
        evaluator: Metadata evaluator (defaults to a sandboxed MetadataEvaluator)
        classifier: Asset classifier (defaults to AssetClassifier)
    """

    def __init__(self, config: AppConfig,
                 blob_repository: IBlobRepository,
                 table_repository: ICatalogTableRepository,
                 evaluator: Optional[MetadataEvaluator] = None,
                 classifier: Optional[AssetClassifier] = None):
        self.config = config
        self.blob_repository = blob_repository
        self.table_repository = table_repository
        self.reader = ArchiveReader(config.archive.max_uncompressed_bytes)
        self.evaluator = evaluator or MetadataEvaluator(config.catalog, config.sandbox)
        self.classifier = classifier or AssetClassifier(config.catalog)

    # ========================================================================
    # ENTRY POINTS
    # ========================================================================

    def ingest(self, container: str, key: str,
               invocation_id: Optional[str] = None) -> IngestResult:
        """
        Fetch the archive blob and ingest it.

        A missing or unreadable source blob surfaces as-is from the blob
        repository and is rendered as a RECEIVED-stage failure.
        """
        invocation_id = invocation_id or str(uuid.uuid4())[:8]
        logger = LoggerFactory.create_with_context(
            ComponentType.SERVICE, "CatalogIngestService",
            invocation_id=invocation_id, source_container=container, archive_key=key
        )
        logger.info(f"📥 Ingesting archive {container}/{key}")

        try:
            data = self.blob_repository.read_blob(container, key)
        except Exception as e:
            logger.error(
                f"❌ Failed to fetch archive {container}/{key}: {e}",
                exc_info=True,
                extra={'custom_dimensions': {'stage': IngestStage.RECEIVED.value}}
            )
            return IngestResult.failed(str(e), IngestStage.RECEIVED)

        return self._run(data, logger)

    def ingest_bytes(self, data: bytes, invocation_id: Optional[str] = None) -> IngestResult:
        """Ingest archive bytes already in memory."""
        logger = LoggerFactory.create_with_context(
            ComponentType.SERVICE, "CatalogIngestService",
            invocation_id=invocation_id or str(uuid.uuid4())[:8]
        )
        return self._run(data, logger)

    # ========================================================================
    # PIPELINE
    # ========================================================================

    def _run(self, data: bytes, logger) -> IngestResult:
        state = _InvocationState(logger)
        persistence = CatalogPersistenceCoordinator(
            self.blob_repository,
            self.table_repository,
            self.config.destination_container,
        )

        try:
            with self.reader.open(data) as archive:
                state.advance(IngestStage.UNPACKED)

                metadata_member = self.evaluator.locate(archive)
                entries = self.evaluator.evaluate(archive)
                state.advance(IngestStage.EVALUATED)

                assets = self.classifier.classify_archive(
                    archive,
                    exclude=metadata_member.path if metadata_member else None
                )
                if not assets:
                    raise ValidationError(
                        "Archive contains no image or video assets",
                        stage=IngestStage.CLASSIFIED.value
                    )
                state.advance(IngestStage.CLASSIFIED)

                high_water_mark = self._fetch_high_water_mark()
                assignments = build_assignments(
                    entries,
                    assets.images,
                    assets.videos,
                    high_water_mark,
                    name_field=self.config.catalog.name_field,
                    separator=self.config.catalog.name_separator,
                )
                state.advance(IngestStage.ALLOCATED)
                logger.info(
                    f"🔢 Allocated identifiers {high_water_mark + 1}..{high_water_mark + len(assignments)} "
                    f"for {len(assignments)} entries"
                )

                for assignment in assignments:
                    state.advance(IngestStage.PERSISTING)
                    persistence.persist(assignment)

                state.advance(IngestStage.COMPLETED)

        except ContractViolationError:
            raise
        except Exception as e:
            failed_stage = self._failure_stage(e, state.stage)
            logger.error(
                f"❌ Archive ingestion failed at stage {failed_stage.value}: {e}",
                exc_info=True,
                extra={'custom_dimensions': {
                    'stage': failed_stage.value,
                    'error_type': type(e).__name__,
                    'records_written': persistence.progress.records_written,
                    'assets_uploaded': persistence.progress.assets_uploaded,
                }}
            )
            if can_stage_transition(state.stage, IngestStage.FAILED):
                state.advance(IngestStage.FAILED)
            return IngestResult.failed(
                str(e),
                failed_stage,
                records_written=persistence.progress.records_written,
                assets_uploaded=persistence.progress.assets_uploaded,
            )

        progress = persistence.progress
        logger.info(
            f"✅ Archive ingested: {progress.records_written} records, "
            f"{progress.assets_uploaded} assets uploaded"
        )
        return IngestResult.succeeded(
            records_written=progress.records_written,
            assets_uploaded=progress.assets_uploaded,
            identifiers=list(progress.identifiers),
        )

    def _fetch_high_water_mark(self) -> int:
        try:
            return self.table_repository.get_high_water_mark()
        except Exception as e:
            raise AllocationFetchError(
                f"Failed to read identifier high-water-mark: {e}",
                stage=IngestStage.ALLOCATED.value,
                cause=e
            ) from e

    @staticmethod
    def _failure_stage(error: Exception, current: IngestStage) -> IngestStage:
        if isinstance(error, CatalogIngestError):
            try:
                return IngestStage(error.stage)
            except ValueError:
                return current
        return current
