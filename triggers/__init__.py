"""
Triggers Package.

Azure Functions trigger implementations.

Endpoints:
    Event Grid catalog_archive_created: BlobCreated on the source container
    POST /api/catalog/ingest: Manual (re-)ingestion of an archive
    GET /api/livez: Liveness probe

Exports:
    Base classes and payload parsing. Trigger instances should be imported
    directly from their modules to avoid initialization at import time.
"""

from .http_base import BaseHttpTrigger, SystemMonitoringTrigger
from .event_payload import ArchiveLocation, parse_trigger_payload

__all__ = [
    'BaseHttpTrigger',
    'SystemMonitoringTrigger',
    'ArchiveLocation',
    'parse_trigger_payload',
]
