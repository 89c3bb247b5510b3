# ============================================================================
# TRIGGER PAYLOAD PARSING
# ============================================================================
# STATUS: Trigger layer - resolve an archive location from a notification
# PURPOSE: Turn Event Grid / S3-style / direct payloads into (container, key)
# EXPORTS: ArchiveLocation, parse_trigger_payload
# DEPENDENCIES: urllib.parse
# ============================================================================
"""
Trigger Payload Parsing.

Accepted shapes:

    Event Grid BlobCreated:
        {"eventType": "Microsoft.Storage.BlobCreated",
         "subject": "/blobServices/default/containers/<c>/blobs/<key>",
         "data": {"url": "https://<acct>.blob.core.windows.net/<c>/<key>"}}

    S3-style notification:
        {"Records": [{"s3": {"bucket": {"name": "<c>"}, "object": {"key": "<key>"}}}]}

    Direct request:
        {"container": "<c>", "key": "<key>"}

S3-style and direct keys are form-decoded ('+' means space). An Event Grid
url path is percent-decoded only, and an Event Grid subject carries the raw
blob name.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional
from urllib.parse import unquote, unquote_plus, urlparse

from exceptions import ValidationError

BLOB_CREATED_EVENT = "Microsoft.Storage.BlobCreated"

_SUBJECT_PREFIX = "/blobServices/default/containers/"


@dataclass(frozen=True)
class ArchiveLocation:
    """Container and decoded key of an uploaded archive."""

    container: str
    key: str

    def __str__(self) -> str:
        return f"{self.container}/{self.key}"


def _location(container: Optional[str], raw_key: Optional[str],
              decode: Optional[Callable[[str], str]] = unquote_plus) -> ArchiveLocation:
    if not container or not raw_key:
        raise ValidationError(
            "Trigger payload does not name an archive container and key",
            stage="received"
        )
    key = decode(raw_key) if decode else raw_key
    return ArchiveLocation(container=container, key=key)


def _from_blob_url(url: str) -> ArchiveLocation:
    # https://<account>.blob.core.windows.net/<container>/<key...>
    path = urlparse(url).path.lstrip("/")
    container, _, key = path.partition("/")
    return _location(container, key, decode=unquote)


def _from_subject(subject: str) -> ArchiveLocation:
    if not subject.startswith(_SUBJECT_PREFIX):
        raise ValidationError(f"Unrecognised event subject: {subject}", stage="received")
    container, marker, key = subject[len(_SUBJECT_PREFIX):].partition("/blobs/")
    if not marker:
        raise ValidationError(f"Unrecognised event subject: {subject}", stage="received")
    return _location(container, key, decode=None)


def _from_event_grid(event: Dict[str, Any]) -> ArchiveLocation:
    event_type = event.get("eventType")
    if event_type and event_type != BLOB_CREATED_EVENT:
        raise ValidationError(f"Unsupported event type: {event_type}", stage="received")

    data = event.get("data") or {}
    if isinstance(data, dict) and data.get("url"):
        return _from_blob_url(data["url"])
    return _from_subject(event.get("subject", ""))


def _from_records(records: Any) -> ArchiveLocation:
    if not isinstance(records, list) or not records:
        raise ValidationError("Notification has no records", stage="received")
    s3 = (records[0] or {}).get("s3") or {}
    container = (s3.get("bucket") or {}).get("name")
    key = (s3.get("object") or {}).get("key")
    return _location(container, key)


def parse_trigger_payload(payload: Any) -> ArchiveLocation:
    """
    Resolve the archive location named by a trigger payload.

    Args:
        payload: Decoded JSON payload (dict)

    Returns:
        ArchiveLocation with URL-decoded key

    Raises:
        ValidationError: Payload shape not recognised or incomplete
    """
    if not isinstance(payload, dict):
        raise ValidationError(
            f"Trigger payload must be an object, got {type(payload).__name__}",
            stage="received"
        )

    if "Records" in payload:
        return _from_records(payload["Records"])
    if "container" in payload or "key" in payload:
        return _location(payload.get("container"), payload.get("key"))
    if "eventType" in payload or "subject" in payload or "data" in payload:
        return _from_event_grid(payload)

    raise ValidationError("Unrecognised trigger payload", stage="received")
