# ============================================================================
# ARCHIVE READER
# ============================================================================
# STATUS: Core - in-memory zip decompression
# PURPOSE: Turn uploaded archive bytes into path -> lazy content accessor
# EXPORTS: ArchiveReader, ArchiveContents, ArchiveEntry, normalize_archive_path
# DEPENDENCIES: zipfile, io
# ============================================================================
"""
Archive Reader.

Decompresses an in-memory zip blob into an ordered mapping from normalized
path to ArchiveEntry. Nothing touches the filesystem; member content is only
inflated when an accessor is asked for it.

Skipped members:
    - directory entries
    - macOS resource forks (__MACOSX/..., ._name)
    - paths escaping the archive root (.. segments)

Usage:
    reader = ArchiveReader(max_uncompressed_bytes=config.archive.max_uncompressed_bytes)
    with reader.open(blob_bytes) as archive:
        for path, entry in archive.items():
            data = entry.read_bytes()
"""

import io
import zipfile
import zlib
from typing import Dict, Iterator, Optional, Tuple

from exceptions import ArchiveFormatError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.CORE, "ArchiveReader")

MACOS_METADATA_DIR = "__MACOSX/"


def normalize_archive_path(name: str) -> str:
    """Forward slashes, no leading './' or '/'."""
    normalized = name.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.lstrip("/")


def _is_escaping_path(path: str) -> bool:
    return any(segment == ".." for segment in path.split("/"))


def _is_macos_metadata(path: str) -> bool:
    basename = path.rsplit("/", 1)[-1]
    return path.startswith(MACOS_METADATA_DIR) or basename.startswith("._")


class ArchiveEntry:
    """
    One archive member with lazily materialised content.

    Valid only while the owning ArchiveContents is open.
    """

    __slots__ = ("path", "_archive", "_info")

    def __init__(self, path: str, archive: zipfile.ZipFile, info: zipfile.ZipInfo):
        self.path = path
        self._archive = archive
        self._info = info

    @property
    def size(self) -> int:
        """Declared uncompressed size."""
        return self._info.file_size

    def read_bytes(self) -> bytes:
        """Inflate and return the member's content."""
        try:
            return self._archive.read(self._info)
        except (zipfile.BadZipFile, zlib.error, RuntimeError, ValueError) as e:
            raise ArchiveFormatError(
                f"Archive member '{self.path}' could not be read: {e}",
                stage="unpacked",
                cause=e
            ) from e

    def read_text(self, encoding: str = "utf-8-sig") -> str:
        """Inflate and decode; a UTF-8 BOM is tolerated."""
        return self.read_bytes().decode(encoding)

    def __repr__(self) -> str:
        return f"ArchiveEntry(path={self.path!r}, size={self.size})"


class ArchiveContents:
    """
    Ordered path -> ArchiveEntry mapping backed by an open zip.

    Iteration order is the archive's central directory order.
    """

    def __init__(self, archive: zipfile.ZipFile, entries: Dict[str, ArchiveEntry]):
        self._archive = archive
        self._entries = entries

    def __enter__(self) -> "ArchiveContents":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._archive.close()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __getitem__(self, path: str) -> ArchiveEntry:
        return self._entries[path]

    def get(self, path: str) -> Optional[ArchiveEntry]:
        return self._entries.get(path)

    def items(self) -> Iterator[Tuple[str, ArchiveEntry]]:
        return iter(self._entries.items())

    def values(self) -> Iterator[ArchiveEntry]:
        return iter(self._entries.values())

    def paths(self) -> list:
        return list(self._entries)


class ArchiveReader:
    """Opens archive bytes into ArchiveContents."""

    def __init__(self, max_uncompressed_bytes: Optional[int] = None):
        self.max_uncompressed_bytes = max_uncompressed_bytes

    def open(self, data: bytes) -> ArchiveContents:
        """
        Open archive bytes.

        Args:
            data: Raw archive blob

        Returns:
            ArchiveContents (use as a context manager)

        Raises:
            ArchiveFormatError: Not a zip, or declared size over the limit
        """
        if not data:
            raise ArchiveFormatError("Archive is empty", stage="received")

        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, ValueError) as e:
            raise ArchiveFormatError(
                f"Uploaded object is not a valid zip archive: {e}",
                stage="received",
                cause=e
            ) from e

        entries: Dict[str, ArchiveEntry] = {}
        total_uncompressed = 0
        skipped = 0

        for info in archive.infolist():
            if info.is_dir():
                continue

            path = normalize_archive_path(info.filename)
            if not path or _is_escaping_path(path) or _is_macos_metadata(path):
                logger.debug(f"Skipping archive member: {info.filename}")
                skipped += 1
                continue

            total_uncompressed += info.file_size
            if self.max_uncompressed_bytes and total_uncompressed > self.max_uncompressed_bytes:
                archive.close()
                raise ArchiveFormatError(
                    f"Archive expands beyond {self.max_uncompressed_bytes} bytes",
                    stage="received"
                )

            # First occurrence wins for duplicated member names
            entries.setdefault(path, ArchiveEntry(path, archive, info))

        logger.info(
            f"📦 Archive opened: {len(entries)} members "
            f"({skipped} skipped, {total_uncompressed} bytes uncompressed)"
        )
        return ArchiveContents(archive, entries)
