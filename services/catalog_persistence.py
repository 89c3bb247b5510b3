# ============================================================================
# CATALOG PERSISTENCE
# ============================================================================
# STATUS: Service - upload matched assets and write catalog records
# PURPOSE: Per-entry persistence: assets first, then the enriched record
# EXPORTS: CatalogPersistenceCoordinator, PersistenceProgress
# DEPENDENCIES: infrastructure (IBlobRepository, ICatalogTableRepository)
# ============================================================================
"""
Catalog Persistence Coordinator.

For each assignment, in entry order:

    1. upload every matched asset (images, then videos) to
       <destination>/<normalized-name>/<archive-path> with its content type
    2. build the CatalogRecord from the upload URLs
    3. upsert the record into the catalog table

Uploads overwrite, so re-running the same archive with the same identifiers
leaves storage unchanged. The first failure aborts the batch: assets already
uploaded and records already written for earlier entries stay in place.
"""

from dataclasses import dataclass, field
from typing import List

from core.models import CatalogAssignment, CatalogRecord, IngestStage
from exceptions import RecordWriteError, UploadError
from infrastructure.blob import IBlobRepository
from infrastructure.catalog_table import ICatalogTableRepository
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.SERVICE, "CatalogPersistence")

_STAGE = IngestStage.PERSISTING.value


@dataclass
class PersistenceProgress:
    """Counters that survive a mid-batch failure."""

    assets_uploaded: int = 0
    records_written: int = 0
    identifiers: List[int] = field(default_factory=list)


class CatalogPersistenceCoordinator:
    """Uploads assets and writes records for a batch of assignments."""

    def __init__(self, blob_repository: IBlobRepository,
                 table_repository: ICatalogTableRepository,
                 destination_container: str):
        self.blob_repository = blob_repository
        self.table_repository = table_repository
        self.destination_container = destination_container
        self.progress = PersistenceProgress()

    def persist(self, assignment: CatalogAssignment) -> CatalogRecord:
        """Upload one entry's assets, then write its record."""
        image_references = [self._upload(assignment, asset) for asset in assignment.images]
        video_references = [self._upload(assignment, asset) for asset in assignment.videos]

        record = CatalogRecord(
            identifier=assignment.identifier,
            fields=dict(assignment.entry.fields),
            image_references=image_references,
            video_references=video_references,
        )

        try:
            self.table_repository.put_record(record)
        except Exception as e:
            raise RecordWriteError(
                f"Failed to write catalog record {assignment.identifier} "
                f"('{assignment.normalized_name}'): {e}",
                stage=_STAGE,
                cause=e
            ) from e

        self.progress.records_written += 1
        self.progress.identifiers.append(assignment.identifier)
        logger.info(
            f"📝 Record {assignment.identifier} written for '{assignment.normalized_name}' "
            f"({len(image_references)} images, {len(video_references)} videos)"
        )
        return record

    def _upload(self, assignment: CatalogAssignment, asset) -> str:
        destination_key = assignment.destination_key(asset)
        try:
            result = self.blob_repository.write_blob(
                container=self.destination_container,
                blob_path=destination_key,
                data=asset.read_bytes(),
                overwrite=True,
                content_type=asset.content_type,
            )
        except Exception as e:
            raise UploadError(
                f"Failed to upload '{asset.path}' to "
                f"{self.destination_container}/{destination_key}: {e}",
                stage=_STAGE,
                cause=e
            ) from e

        self.progress.assets_uploaded += 1
        return result['url']
