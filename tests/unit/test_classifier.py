"""
Asset Classifier tests.
"""

import pytest

from config import CatalogConfig
from core.archive import ArchiveReader
from core.classifier import AssetClassifier
from core.models import AssetKind
from tests.factories.archive_factories import make_archive


@pytest.fixture
def classifier():
    return AssetClassifier(CatalogConfig())


class TestClassifyPath:

    @pytest.mark.parametrize("path,kind,content_type", [
        ("Poster_Images/A.png", AssetKind.IMAGE, "image/png"),
        ("Poster_Images/A.jpg", AssetKind.IMAGE, "image/jpeg"),
        ("batch/Poster_Images/A.JPEG", AssetKind.IMAGE, "image/jpeg"),
        ("Movie_Videos/A.mp4", AssetKind.VIDEO, "video/mp4"),
        ("Movie_Videos/A.mov", AssetKind.VIDEO, "video/quicktime"),
        ("Movie_Videos/A.AVI", AssetKind.VIDEO, "video/x-msvideo"),
    ])
    def test_recognised(self, classifier, path, kind, content_type):
        assert classifier.classify_path(path) == (kind, content_type)

    @pytest.mark.parametrize("path", [
        "readme.txt",
        "Poster_Images/A.mp4",
        "Movie_Videos/A.png",
        "Posters/A.png",
        "Poster_Images/noextension",
        "Poster_Images/A.gif",
    ])
    def test_dropped(self, classifier, path):
        assert classifier.classify_path(path) is None


class TestClassifyArchive:

    def test_one_image_one_video_readme_excluded(self, classifier):
        data = make_archive({
            "Poster_Images/A.png": None,
            "Movie_Videos/A.mp4": None,
            "readme.txt": "notes",
        })
        with ArchiveReader().open(data) as archive:
            result = classifier.classify_archive(archive)

        assert [a.path for a in result.images] == ["Poster_Images/A.png"]
        assert [a.path for a in result.videos] == ["Movie_Videos/A.mp4"]
        assert result.total == 2

    def test_excluded_path_skipped(self, classifier):
        data = make_archive({"Poster_Images/meta.png": None, "Poster_Images/B.png": None})
        with ArchiveReader().open(data) as archive:
            result = classifier.classify_archive(archive, exclude="Poster_Images/meta.png")
        assert [a.path for a in result.images] == ["Poster_Images/B.png"]

    def test_empty_result_is_falsy(self, classifier):
        with ArchiveReader().open(make_archive({"readme.txt": "x"})) as archive:
            assert not classifier.classify_archive(archive)

    def test_asset_content_is_lazy(self, classifier):
        data = make_archive({"Poster_Images/A.png": b"\x89PNG"})
        with ArchiveReader().open(data) as archive:
            asset = classifier.classify_archive(archive).images[0]
            assert asset.filename == "A.png"
            assert asset.read_bytes() == b"\x89PNG"
