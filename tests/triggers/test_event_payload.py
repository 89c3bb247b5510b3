"""
Trigger payload parsing tests.
"""

import pytest

from exceptions import ValidationError
from triggers.event_payload import parse_trigger_payload


class TestEventGridPayload:

    def test_blob_url(self):
        location = parse_trigger_payload({
            "eventType": "Microsoft.Storage.BlobCreated",
            "subject": "/blobServices/default/containers/catalog-source/blobs/uploads/batch.zip",
            "data": {"url": "https://acct.blob.core.windows.net/catalog-source/uploads/batch%2001.zip"},
        })
        assert location.container == "catalog-source"
        assert location.key == "uploads/batch 01.zip"

    def test_subject_fallback(self):
        location = parse_trigger_payload({
            "eventType": "Microsoft.Storage.BlobCreated",
            "subject": "/blobServices/default/containers/catalog-source/blobs/new movies.zip",
            "data": {},
        })
        assert (location.container, location.key) == ("catalog-source", "new movies.zip")

    def test_plus_in_url_is_literal(self):
        location = parse_trigger_payload({
            "eventType": "Microsoft.Storage.BlobCreated",
            "subject": "/blobServices/default/containers/catalog-source/blobs/batch+1.zip",
            "data": {"url": "https://acct.blob.core.windows.net/catalog-source/batch+1.zip"},
        })
        assert location.key == "batch+1.zip"

    def test_plus_in_subject_is_literal(self):
        location = parse_trigger_payload({
            "eventType": "Microsoft.Storage.BlobCreated",
            "subject": "/blobServices/default/containers/catalog-source/blobs/batch+1%.zip",
            "data": {},
        })
        assert location.key == "batch+1%.zip"

    def test_other_event_types_rejected(self):
        with pytest.raises(ValidationError, match="Unsupported event type"):
            parse_trigger_payload({
                "eventType": "Microsoft.Storage.BlobDeleted",
                "data": {"url": "https://acct.blob.core.windows.net/c/k.zip"},
            })

    def test_malformed_subject(self):
        with pytest.raises(ValidationError):
            parse_trigger_payload({"subject": "/something/else", "data": {}})


class TestRecordsPayload:

    def test_plus_decoded_to_space(self):
        location = parse_trigger_payload({
            "Records": [{"s3": {"bucket": {"name": "catalog-source"}, "object": {"key": "Summer+Batch%281%29.zip"}}}]
        })
        assert location.key == "Summer Batch(1).zip"
        assert str(location) == "catalog-source/Summer Batch(1).zip"

    def test_empty_records(self):
        with pytest.raises(ValidationError):
            parse_trigger_payload({"Records": []})


class TestDirectPayload:

    def test_container_and_key(self):
        location = parse_trigger_payload({"container": "catalog-source", "key": "a+b.zip"})
        assert location.key == "a b.zip"

    @pytest.mark.parametrize("payload", [
        {"container": "catalog-source"},
        {"key": "a.zip"},
        {"container": "", "key": "a.zip"},
    ])
    def test_incomplete(self, payload):
        with pytest.raises(ValidationError):
            parse_trigger_payload(payload)

    @pytest.mark.parametrize("payload", [None, [], "catalog-source/a.zip", {"unrelated": 1}])
    def test_unrecognised(self, payload):
        with pytest.raises(ValidationError):
            parse_trigger_payload(payload)
