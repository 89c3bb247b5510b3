# ============================================================================
# ASSET CLASSIFIER
# ============================================================================
# STATUS: Core - sort archive members into media assets
# PURPOSE: Image/video classification by folder marker and extension
# EXPORTS: AssetClassifier, ClassifiedAssets
# DEPENDENCIES: config, core.archive, core.models
# ============================================================================
"""
Asset Classifier.

Partitions archive members into image and video assets by folder marker and
extension. Anything unrecognised is dropped without error.

Rules (defaults):
    image: path contains "Poster_Images" and ends in .png / .jpg / .jpeg
    video: path contains "Movie_Videos" and ends in .mp4 / .mov / .avi

Extension matching is case-insensitive; folder markers are matched as
substrings of the full archive path.

Exports:
    AssetClassifier
    ClassifiedAssets
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from config import CatalogConfig
from core.archive import ArchiveContents
from core.models import AssetKind, ClassifiedAsset, ContentSource
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.CORE, "AssetClassifier")


def _extension(path: str) -> str:
    basename = path.rsplit("/", 1)[-1]
    if "." not in basename:
        return ""
    return "." + basename.rsplit(".", 1)[-1].lower()


@dataclass
class ClassifiedAssets:
    """Images and videos in archive iteration order."""

    images: List[ClassifiedAsset] = field(default_factory=list)
    videos: List[ClassifiedAsset] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.images) + len(self.videos)

    def __bool__(self) -> bool:
        return self.total > 0


class AssetClassifier:
    """Classifies archive members using the catalog naming conventions."""

    def __init__(self, catalog: CatalogConfig):
        self.catalog = catalog

    def classify_path(self, path: str) -> Optional[tuple]:
        """
        Classify a single path.

        Returns:
            (AssetKind, content_type) or None when unrecognised
        """
        extension = _extension(path)
        if not extension:
            return None

        if self.catalog.image_folder_marker in path:
            content_type = self.catalog.image_content_types.get(extension)
            if content_type:
                return AssetKind.IMAGE, content_type

        if self.catalog.video_folder_marker in path:
            content_type = self.catalog.video_content_types.get(extension)
            if content_type:
                return AssetKind.VIDEO, content_type

        return None

    def classify(self, sources: Iterable[ContentSource],
                 exclude: Optional[str] = None) -> ClassifiedAssets:
        """
        Classify archive members.

        Args:
            sources: Archive entries (anything with .path and read_bytes())
            exclude: Path to skip, normally the metadata script

        Returns:
            ClassifiedAssets with images and videos
        """
        result = ClassifiedAssets()
        dropped = 0

        for source in sources:
            if exclude is not None and source.path == exclude:
                continue

            classification = self.classify_path(source.path)
            if classification is None:
                dropped += 1
                continue

            kind, content_type = classification
            asset = ClassifiedAsset(kind=kind, path=source.path,
                                    content_type=content_type, source=source)
            if kind == AssetKind.IMAGE:
                result.images.append(asset)
            else:
                result.videos.append(asset)

        logger.info(
            f"🗂️ Classified {len(result.images)} images, {len(result.videos)} videos "
            f"({dropped} members ignored)"
        )
        return result

    def classify_archive(self, archive: ArchiveContents,
                         exclude: Optional[str] = None) -> ClassifiedAssets:
        """Classify every member of an open archive."""
        return self.classify(archive.values(), exclude=exclude)
