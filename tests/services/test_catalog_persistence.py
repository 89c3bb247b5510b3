"""
CatalogPersistenceCoordinator tests.
"""

import pytest

from core.matcher import build_assignments
from core.models import AssetKind, CatalogEntry, ClassifiedAsset
from exceptions import RecordWriteError, UploadError
from services import CatalogPersistenceCoordinator
from tests.factories.archive_factories import InMemoryBlobRepository, InMemoryCatalogTable


class _Content:
    def __init__(self, path, data):
        self.path = path
        self.data = data

    def read_bytes(self):
        return self.data

    def read_text(self):
        return self.data.decode()


def _asset(kind, path, content_type):
    return ClassifiedAsset(kind=kind, path=path, content_type=content_type, source=_Content(path, path.encode()))


@pytest.fixture
def assignments():
    entries = [
        CatalogEntry(position=0, fields={"Name": "The Matrix", "Year": 1999}),
        CatalogEntry(position=1, fields={"Name": "Heat"}),
    ]
    images = [_asset(AssetKind.IMAGE, "Poster_Images/The_Matrix.jpg", "image/jpeg")]
    videos = [
        _asset(AssetKind.VIDEO, "Movie_Videos/The_Matrix_trailer.mov", "video/quicktime"),
        _asset(AssetKind.VIDEO, "Movie_Videos/Heat.avi", "video/x-msvideo"),
    ]
    return build_assignments(entries, images, videos, high_water_mark=10)


def _persist_batch(coordinator, assignments):
    for assignment in assignments:
        coordinator.persist(assignment)
    return coordinator.progress


class TestPersistBatch:

    def test_images_then_videos_then_record(self, assignments):
        blob_repo = InMemoryBlobRepository()
        table = InMemoryCatalogTable()
        progress = _persist_batch(CatalogPersistenceCoordinator(blob_repo, table, "media"), assignments)

        assert blob_repo.uploads == [
            ("media", "The_Matrix/Poster_Images/The_Matrix.jpg"),
            ("media", "The_Matrix/Movie_Videos/The_Matrix_trailer.mov"),
            ("media", "Heat/Movie_Videos/Heat.avi"),
        ]
        assert progress.assets_uploaded == 3
        assert progress.records_written == 2
        assert progress.identifiers == [11, 12]

        matrix = table.records[11]
        assert matrix.fields == {"Name": "The Matrix", "Year": 1999}
        assert matrix.image_references == [blob_repo.url_for("media", "The_Matrix/Poster_Images/The_Matrix.jpg")]
        assert len(matrix.video_references) == 1
        assert blob_repo.content_types[("media", "Heat/Movie_Videos/Heat.avi")] == "video/x-msvideo"

    def test_upload_failure_wrapped(self, assignments):
        coordinator = CatalogPersistenceCoordinator(
            InMemoryBlobRepository(fail_on_write="trailer"), InMemoryCatalogTable(), "media"
        )
        with pytest.raises(UploadError) as exc_info:
            _persist_batch(coordinator, assignments)

        assert exc_info.value.stage == "persisting"
        assert isinstance(exc_info.value.cause, IOError)
        assert coordinator.progress.assets_uploaded == 1
        assert coordinator.progress.records_written == 0

    def test_record_failure_wrapped(self, assignments):
        coordinator = CatalogPersistenceCoordinator(
            InMemoryBlobRepository(), InMemoryCatalogTable(fail_on_identifier=12), "media"
        )
        with pytest.raises(RecordWriteError):
            _persist_batch(coordinator, assignments)
        assert coordinator.progress.identifiers == [11]
