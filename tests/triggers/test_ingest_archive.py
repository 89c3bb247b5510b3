"""
ArchiveIngestTrigger tests — invocation boundary responses.
"""

import json
from unittest.mock import MagicMock

import azure.functions as func

from core.models import IngestResult, IngestStage
from tests.factories.archive_factories import (
    InMemoryBlobRepository,
    InMemoryCatalogTable,
    make_catalog_archive,
)
from triggers.ingest_archive import ArchiveIngestTrigger
from triggers.livez import livez_trigger


def _trigger_with_archive(make_service, key="uploads/batch 01.zip"):
    blob_repo = InMemoryBlobRepository()
    blob_repo.blobs[("catalog-source", key)] = make_catalog_archive(
        entries=[{"Name": "Alpha"}],
        media={"Poster_Images/Alpha.png": None},
    )
    table = InMemoryCatalogTable()
    trigger = ArchiveIngestTrigger(service=make_service(blob_repo, table), source_container="catalog-source")
    return trigger, table


class TestHandle:

    def test_success_response(self, make_service):
        trigger, table = _trigger_with_archive(make_service)
        response = trigger.handle({"container": "catalog-source", "key": "uploads/batch+01.zip"})

        assert response["statusCode"] == 200
        assert json.loads(response["body"])["message"] == "Items processed successfully."
        assert table.writes == [1]

    def test_bad_payload_is_500_not_exception(self):
        service = MagicMock()
        response = ArchiveIngestTrigger(service=service).handle({"nothing": "here"})

        assert response["statusCode"] == 500
        assert json.loads(response["body"])["message"] == "Failed to process item."
        service.ingest.assert_not_called()

    def test_service_result_passed_through(self):
        service = MagicMock()
        service.ingest.return_value = IngestResult.failed("boom", IngestStage.PERSISTING)
        response = ArchiveIngestTrigger(service=service, source_container="c").handle(
            {"container": "c", "key": "k.zip"}, invocation_id="abc"
        )

        service.ingest.assert_called_once_with("c", "k.zip", invocation_id="abc")
        assert response["statusCode"] == 500
        assert json.loads(response["body"])["error"] == "boom"

    def test_destination_container_not_ingested(self, make_service):
        trigger, table = _trigger_with_archive(make_service)
        response = trigger.handle({"container": "catalog-media", "key": "Alpha/catalog.zip"})

        assert response["statusCode"] == 500
        assert "outside source container" in json.loads(response["body"])["error"]
        assert table.writes == []
        assert table.scans == 0

    def test_source_container_from_configuration(self):
        from config import get_config

        trigger = ArchiveIngestTrigger(service=MagicMock())
        assert trigger.source_container == get_config().source_container


class TestEventGrid:

    def test_event_adapted(self, make_service):
        trigger, table = _trigger_with_archive(make_service)
        event = func.EventGridEvent(
            id="evt-1",
            data={"url": "https://testaccount.blob.core.windows.net/catalog-source/uploads/batch%2001.zip"},
            topic="/subscriptions/x/resourceGroups/y/providers/Microsoft.Storage/storageAccounts/testaccount",
            subject="/blobServices/default/containers/catalog-source/blobs/uploads/batch 01.zip",
            event_type="Microsoft.Storage.BlobCreated",
            event_time=None,
            data_version="1",
        )

        response = trigger.handle_event(event)
        assert response["statusCode"] == 200
        assert table.writes == [1]


class TestHttpRoutes:

    def test_ingest_route(self, make_service):
        trigger, _ = _trigger_with_archive(make_service)
        req = func.HttpRequest(
            method="POST",
            url="/api/catalog/ingest",
            body=json.dumps({"container": "catalog-source", "key": "uploads/batch 01.zip"}).encode(),
        )
        response = trigger.handle_request(req)

        assert response.status_code == 200
        assert response.mimetype == "application/json"
        assert json.loads(response.get_body())["records_written"] == 1

    def test_ingest_route_invalid_json(self):
        req = func.HttpRequest(method="POST", url="/api/catalog/ingest", body=b"{not json")
        response = ArchiveIngestTrigger(service=MagicMock()).handle_request(req)
        assert response.status_code == 500
        assert "Invalid JSON" in json.loads(response.get_body())["error"]

    def test_livez(self):
        req = func.HttpRequest(method="GET", url="/api/livez", body=b"")
        response = livez_trigger.handle_request(req)
        assert response.status_code == 200
        assert json.loads(response.get_body())["status"] == "alive"

    def test_livez_rejects_post(self):
        req = func.HttpRequest(method="POST", url="/api/livez", body=b"")
        assert livez_trigger.handle_request(req).status_code == 405
