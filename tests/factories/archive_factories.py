"""
Archive and storage factories.

Builds zip archives in memory and in-memory stand-ins for the blob and
table repositories so the pipeline runs without Azure.
"""

import io
import json
import random
import string
import zipfile
from typing import Any, Dict, List, Optional

from core.models import CatalogRecord
from infrastructure.blob import IBlobRepository
from infrastructure.catalog_table import ICatalogTableRepository


def _random_bytes(length: int = 32) -> bytes:
    """Random payload standing in for media content."""
    return "".join(random.choices(string.ascii_letters, k=length)).encode()


def make_metadata_script(entries: List[Dict[str, Any]], symbol: str = "testArray") -> str:
    """JavaScript source binding `symbol` to the given entries."""
    return f"const {symbol} = {json.dumps(entries)};\n"


def make_archive(files: Dict[str, Any]) -> bytes:
    """
    Zip the given {path: content} mapping.

    str content is UTF-8 encoded; None content gets random bytes.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for path, content in files.items():
            if content is None:
                content = _random_bytes()
            if isinstance(content, str):
                content = content.encode("utf-8")
            archive.writestr(path, content)
    return buffer.getvalue()


def make_catalog_archive(entries: Optional[List[Dict[str, Any]]] = None,
                         media: Optional[Dict[str, Any]] = None,
                         metadata_path: str = "catalog/metadata.js") -> bytes:
    """Archive with a metadata script plus media files."""
    files: Dict[str, Any] = {}
    if entries is not None:
        files[metadata_path] = make_metadata_script(entries)
    files.update(media or {})
    return make_archive(files)


class InMemoryBlobRepository(IBlobRepository):
    """Dict-backed blob store recording every upload."""

    account_url = "https://testaccount.blob.core.windows.net"

    def __init__(self, blobs: Optional[Dict[tuple, bytes]] = None,
                 fail_on_write: Optional[str] = None):
        self.blobs: Dict[tuple, bytes] = dict(blobs or {})
        self.content_types: Dict[tuple, str] = {}
        self.uploads: List[tuple] = []
        self.fail_on_write = fail_on_write

    def read_blob(self, container: str, blob_path: str) -> bytes:
        from azure.core.exceptions import ResourceNotFoundError

        if (container, blob_path) not in self.blobs:
            raise ResourceNotFoundError(f"The specified blob does not exist: {container}/{blob_path}")
        return self.blobs[(container, blob_path)]

    def write_blob(self, container, blob_path, data, overwrite=True,
                   content_type="application/octet-stream", metadata=None):
        if self.fail_on_write and self.fail_on_write in blob_path:
            raise IOError(f"simulated upload failure for {blob_path}")
        self.blobs[(container, blob_path)] = data
        self.content_types[(container, blob_path)] = content_type
        self.uploads.append((container, blob_path))
        return {
            'container': container,
            'blob_path': blob_path,
            'url': self.url_for(container, blob_path),
            'size': len(data),
            'etag': None,
        }

    def url_for(self, container: str, blob_path: str) -> str:
        return f"{self.account_url}/{container}/{blob_path}"


class InMemoryCatalogTable(ICatalogTableRepository):
    """Dict-backed catalog table keyed by identifier."""

    def __init__(self, existing_identifiers=(), fail_on_scan: bool = False,
                 fail_on_identifier: Optional[int] = None):
        self.records: Dict[int, CatalogRecord] = {}
        self.existing_identifiers = list(existing_identifiers)
        self.writes: List[int] = []
        self.scans = 0
        self.fail_on_scan = fail_on_scan
        self.fail_on_identifier = fail_on_identifier

    def get_high_water_mark(self) -> int:
        self.scans += 1
        if self.fail_on_scan:
            raise ConnectionError("simulated table scan failure")
        return max(self.existing_identifiers + list(self.records), default=0)

    def put_record(self, record: CatalogRecord) -> None:
        if record.identifier == self.fail_on_identifier:
            raise ConnectionError(f"simulated write failure for {record.identifier}")
        self.records[record.identifier] = record
        self.writes.append(record.identifier)
