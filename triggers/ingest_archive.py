# ============================================================================
# ARCHIVE INGEST TRIGGER
# ============================================================================
# STATUS: Trigger layer - Event Grid BlobCreated + POST /api/catalog/ingest
# PURPOSE: Invocation boundary: payload in, {statusCode, body} out
# EXPORTS: ArchiveIngestTrigger, ingest_archive_trigger
# DEPENDENCIES: azure.functions, services.catalog_ingest, infrastructure, config
# ENTRY_POINTS: ingest_archive_trigger.handle(payload)
#               ingest_archive_trigger.handle_event(event)
#               ingest_archive_trigger.handle_request(req)
# ============================================================================
"""
Archive Ingest Trigger.

Every failure is converted here into the 500 response; nothing escapes to
the Functions host. Event Grid delivery is therefore never retried for a
rejected archive. Manual re-processing goes through the HTTP route with a
direct {"container", "key"} body.

Only archives in the configured source container are ingested. Media the
pipeline uploads to the destination container is rejected at RECEIVED even
when an account-wide Event Grid subscription delivers it here.

Repositories and the service are created lazily on the first invocation so
that importing function_app.py does not touch storage.
"""

import uuid
from typing import Any, Dict, Optional

import azure.functions as func

from config import get_config
from core.models import IngestResult, IngestStage
from exceptions import CatalogIngestError
from util_logger import LoggerFactory, ComponentType

from .event_payload import parse_trigger_payload

logger = LoggerFactory.create_logger(ComponentType.TRIGGER, "ArchiveIngestTrigger")


class ArchiveIngestTrigger:
    """
    Runs the ingest pipeline for one archive notification.

    Args:
        service: Pre-built CatalogIngestService (tests); created from
            configuration on first use when omitted
        source_container: Only container archives are accepted from
            (the configured source container when omitted)
    """

    def __init__(self, service=None, source_container: Optional[str] = None):
        self._service = service
        self._source_container = source_container

    @property
    def service(self):
        """Lazy-loaded ingest service."""
        if self._service is None:
            from infrastructure import RepositoryFactory
            from services import CatalogIngestService

            config = get_config()
            repos = RepositoryFactory.create_repositories(config)
            self._service = CatalogIngestService(config, repos['blob'], repos['catalog_table'])
        return self._service

    @property
    def source_container(self) -> str:
        if self._source_container is None:
            self._source_container = get_config().source_container
        return self._source_container

    # ========================================================================
    # INVOCATION BOUNDARY
    # ========================================================================

    def handle(self, payload: Any, invocation_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Ingest the archive named by a trigger payload.

        Returns:
            {"statusCode": 200|500, "body": "<json>"}
        """
        invocation_id = invocation_id or str(uuid.uuid4())[:8]

        try:
            location = parse_trigger_payload(payload)
        except CatalogIngestError as e:
            logger.error(
                f"❌ [{invocation_id}] Rejected trigger payload: {e}",
                extra={'custom_dimensions': {'invocation_id': invocation_id, 'stage': e.stage}}
            )
            return IngestResult.failed(str(e), IngestStage.RECEIVED).to_response()

        logger.info(f"📨 [{invocation_id}] Archive notification for {location}")

        try:
            if location.container != self.source_container:
                return self._reject_foreign_container(location, invocation_id)
            result = self.service.ingest(location.container, location.key, invocation_id=invocation_id)
        except Exception as e:
            # Configuration or service construction failed, or a contract violation escaped the pipeline
            logger.error(f"💥 [{invocation_id}] Ingest service error: {e}", exc_info=True)
            result = IngestResult.failed(str(e), IngestStage.RECEIVED)

        log = logger.info if result.success else logger.warning
        log(
            f"[{invocation_id}] Ingest finished with status {result.status_code}",
            extra={'custom_dimensions': {
                'invocation_id': invocation_id,
                'stage': result.stage.value,
                'records_written': result.records_written,
                'assets_uploaded': result.assets_uploaded,
            }}
        )
        return result.to_response()

    def _reject_foreign_container(self, location, invocation_id: str) -> Dict[str, Any]:
        message = f"Archive {location} is outside source container '{self.source_container}'"
        logger.warning(
            f"⚠️ [{invocation_id}] {message}",
            extra={'custom_dimensions': {'invocation_id': invocation_id, 'stage': IngestStage.RECEIVED.value}}
        )
        return IngestResult.failed(message, IngestStage.RECEIVED).to_response()

    def handle_event(self, event: func.EventGridEvent) -> Dict[str, Any]:
        """Adapt an Event Grid event to the payload shape handle() accepts."""
        payload = {
            "eventType": event.event_type,
            "subject": event.subject,
            "data": event.get_json(),
        }
        return self.handle(payload, invocation_id=event.id)

    def handle_request(self, req: func.HttpRequest) -> func.HttpResponse:
        """POST /api/catalog/ingest - same status and body as the event path."""
        request_id = str(uuid.uuid4())[:8]
        try:
            payload = req.get_json()
        except ValueError as e:
            response = IngestResult.failed(
                f"Invalid JSON in request body: {e}", IngestStage.RECEIVED
            ).to_response()
        else:
            response = self.handle(payload, invocation_id=request_id)

        return func.HttpResponse(
            response["body"],
            status_code=response["statusCode"],
            mimetype="application/json",
            headers={"X-Request-ID": request_id}
        )


# Singleton instance
ingest_archive_trigger = ArchiveIngestTrigger()
