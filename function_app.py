"""
Azure Functions entry point for the media catalog archive ingester.

A zip archive dropped into the source container carries one metadata script
(an array of catalog entries) plus poster images and video files. Each new
archive is unpacked, its metadata evaluated in a sandbox, its media
classified and matched to entries by name, uploaded to the destination
container, and recorded in the catalog table under freshly allocated
identifiers.

Architecture:
    Event Grid (BlobCreated) / HTTP -> ArchiveIngestTrigger -> CatalogIngestService
        -> ArchiveReader -> MetadataEvaluator (V8 isolate) -> AssetClassifier
        -> Matcher/Allocator (table high-water-mark)
        -> CatalogPersistenceCoordinator (blob uploads, table upserts)

Exports:
    app: Azure Function App instance

Endpoints:
    Event Grid:
        catalog_archive_created - Microsoft.Storage.BlobCreated on the source container

    HTTP:
        POST /api/catalog/ingest - Re-process an archive: {"container": ..., "key": ...}
        GET  /api/livez - Liveness probe

Environment Variables:
    STORAGE_ACCOUNT_NAME: Azure storage account name (managed identity)
    CATALOG_STORAGE_CONNECTION_STRING: Connection string (Azurite / local dev)
    CATALOG_SOURCE_CONTAINER: Container receiving archives
    CATALOG_DESTINATION_CONTAINER: Container receiving media assets
    CATALOG_TABLE_NAME: Catalog table
"""

# ========================================================================
# IMPORTS - Categorized by source for maintainability
# ========================================================================

# Native Python modules
import logging

# Azure SDK modules (3rd party - Microsoft)
import azure.functions as func

# Suppress Azure Identity and Azure SDK authentication/HTTP logging
logging.getLogger("azure.identity").setLevel(logging.WARNING)
logging.getLogger("azure.identity._internal").setLevel(logging.WARNING)
logging.getLogger("azure.core.pipeline.policies.http_logging_policy").setLevel(logging.WARNING)
logging.getLogger("azure.storage").setLevel(logging.WARNING)
logging.getLogger("azure.data.tables").setLevel(logging.WARNING)
logging.getLogger("azure.core").setLevel(logging.WARNING)
logging.getLogger("msal").setLevel(logging.WARNING)  # Microsoft Authentication Library

# Application modules (our code)
from util_logger import LoggerFactory, ComponentType
from triggers.ingest_archive import ingest_archive_trigger
from triggers.livez import livez_trigger

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "function_app")

app = func.FunctionApp(http_auth_level=func.AuthLevel.FUNCTION)


# ============================================================================
# ARCHIVE INGESTION
# ============================================================================

@app.function_name(name="catalog_archive_created")
@app.event_grid_trigger(arg_name="event")
def catalog_archive_created(event: func.EventGridEvent) -> None:
    """New archive blob in the source container."""
    response = ingest_archive_trigger.handle_event(event)
    logger.info(f"catalog_archive_created {event.id}: {response['statusCode']} {response['body']}")


@app.route(route="catalog/ingest", methods=["POST"])
def catalog_ingest(req: func.HttpRequest) -> func.HttpResponse:
    """Manual re-processing of an archive already in storage."""
    return ingest_archive_trigger.handle_request(req)


# ============================================================================
# PROBES
# ============================================================================

@app.route(route="livez", methods=["GET"], auth_level=func.AuthLevel.ANONYMOUS)
def livez(req: func.HttpRequest) -> func.HttpResponse:
    """Liveness probe - is the app alive? No dependencies checked."""
    return livez_trigger.handle_request(req)
