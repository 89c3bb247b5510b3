# ============================================================================
# CATALOG TABLE REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Azure Table Storage repository for catalog records
# PURPOSE: High-water-mark scan and record upsert for the catalog table
# EXPORTS: ICatalogTableRepository, CatalogTableRepository
# INTERFACES: ICatalogTableRepository for dependency injection
# DEPENDENCIES: azure-data-tables, azure-identity, config
# PATTERNS: Repository, DefaultAzureCredential, idempotent table creation
# ============================================================================

"""
Catalog Table Repository.

Table layout:
    PartitionKey: configured partition (all catalog records share one)
    RowKey:       zero-padded identifier
    <identifier_field>: identifier as an integer
    <entry fields>: verbatim (lists / objects JSON-encoded)
    <image/video reference fields>: JSON-encoded URL lists

The high-water-mark is the maximum identifier present, found with a
projection scan of the identifier field. There is no counter row and no
conditional write, so concurrent batches can collide on identifiers.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from azure.data.tables import TableServiceClient, TableClient, UpdateMode
from azure.identity import DefaultAzureCredential
from azure.core.exceptions import ResourceExistsError

from config import StorageConfig, CatalogConfig
from core.models import CatalogRecord
from exceptions import ContractViolationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.REPOSITORY, "CatalogTableRepository")


# ============================================================================
# CATALOG TABLE INTERFACE
# ============================================================================

class ICatalogTableRepository(ABC):
    """Interface for catalog table operations."""

    @abstractmethod
    def get_high_water_mark(self) -> int:
        """Maximum identifier present in the table, 0 when empty"""
        pass

    @abstractmethod
    def put_record(self, record: CatalogRecord) -> None:
        """Upsert a record keyed by its identifier"""
        pass


# ============================================================================
# AZURE TABLE IMPLEMENTATION
# ============================================================================

class CatalogTableRepository(ICatalogTableRepository):
    """Azure Table Storage backed catalog."""

    def __init__(self, storage: StorageConfig, catalog: CatalogConfig,
                 table_service: Optional[TableServiceClient] = None):
        """
        Initialize from storage and catalog configuration.

        Args:
            storage: Account name / connection string
            catalog: Table name, partition key and field names
            table_service: Pre-built client (tests, custom pipelines)
        """
        self.catalog = catalog
        self.table_name = catalog.table_name

        if table_service is not None:
            self.table_service = table_service
        elif storage.connection_string:
            self.table_service = TableServiceClient.from_connection_string(storage.connection_string)
        else:
            self.table_service = TableServiceClient(
                storage.table_account_url, credential=DefaultAzureCredential()
            )

        self._table_client: Optional[TableClient] = None
        logger.info(f"🔗 Catalog table repository initialized: {self.table_name}")

    def _get_table_client(self) -> TableClient:
        if self._table_client is None:
            self._table_client = self.table_service.get_table_client(self.table_name)
        return self._table_client

    def ensure_table_exists(self) -> None:
        """Create the catalog table if it doesn't exist - idempotent."""
        try:
            self.table_service.create_table(self.table_name)
            logger.info(f"📋 Created table: {self.table_name}")
        except ResourceExistsError:
            logger.debug(f"📋 Table already exists: {self.table_name}")

    # ========================================================================
    # HIGH-WATER-MARK
    # ========================================================================

    @staticmethod
    def _as_int(raw: Any) -> Optional[int]:
        # Int64 properties come back wrapped in EntityProperty
        value = getattr(raw, "value", raw)
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str) and value.strip().isdigit():
            return int(value.strip())
        return None

    def get_high_water_mark(self) -> int:
        """
        Scan the identifier projection and return the maximum.

        Returns:
            Maximum identifier, 0 when the table holds no records

        Raises:
            Azure SDK errors (wrapped by the caller into AllocationFetchError)
        """
        field = self.catalog.identifier_field
        table_client = self._get_table_client()

        high_water_mark = 0
        scanned = 0
        for entity in table_client.list_entities(select=[field]):
            scanned += 1
            identifier = self._as_int(entity.get(field))
            if identifier is None:
                logger.warning(f"⚠️ Ignoring non-numeric {field} value: {entity.get(field)!r}")
                continue
            high_water_mark = max(high_water_mark, identifier)

        logger.debug(f"Scanned {scanned} entities in {self.table_name}, high-water-mark {high_water_mark}")
        return high_water_mark

    # ========================================================================
    # WRITE
    # ========================================================================

    def put_record(self, record: CatalogRecord) -> None:
        """Upsert (replace) the record's entity."""
        if not isinstance(record, CatalogRecord):
            raise ContractViolationError(
                f"put_record expects CatalogRecord, got {type(record).__name__}"
            )

        entity = record.to_entity(
            partition_key=self.catalog.partition_key,
            identifier_field=self.catalog.identifier_field,
            image_field=self.catalog.image_reference_field,
            video_field=self.catalog.video_reference_field,
        )
        self._get_table_client().upsert_entity(entity=entity, mode=UpdateMode.REPLACE)
        logger.debug(f"Upserted {self.catalog.identifier_field}={record.identifier} into {self.table_name}")
