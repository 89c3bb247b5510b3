"""
CatalogTableRepository tests against a mocked TableServiceClient.
"""

from unittest.mock import MagicMock

import pytest
from azure.core.exceptions import ResourceExistsError
from azure.data.tables import EntityProperty, EdmType, UpdateMode

from config import CatalogConfig, StorageConfig
from core.models import CatalogRecord
from exceptions import ContractViolationError
from infrastructure.catalog_table import CatalogTableRepository


def _repository(entities=()):
    table_client = MagicMock()
    table_client.list_entities.return_value = list(entities)
    table_service = MagicMock()
    table_service.get_table_client.return_value = table_client
    repo = CatalogTableRepository(StorageConfig(), CatalogConfig(), table_service=table_service)
    return repo, table_service, table_client


class TestHighWaterMark:

    def test_empty_table_is_zero(self):
        repo, _, _ = _repository()
        assert repo.get_high_water_mark() == 0

    def test_maximum_identifier(self):
        repo, _, table_client = _repository([{"Movie_ID": 3}, {"Movie_ID": 5}, {"Movie_ID": 4}])
        assert repo.get_high_water_mark() == 5
        table_client.list_entities.assert_called_once_with(select=["Movie_ID"])

    def test_int64_entity_property_unwrapped(self):
        repo, _, _ = _repository([
            {"Movie_ID": EntityProperty(12, EdmType.INT64)},
            {"Movie_ID": 7},
        ])
        assert repo.get_high_water_mark() == 12

    def test_numeric_strings_counted_and_garbage_skipped(self):
        repo, _, _ = _repository([{"Movie_ID": "41"}, {"Movie_ID": "n/a"}, {}, {"Movie_ID": True}])
        assert repo.get_high_water_mark() == 41

    def test_scan_errors_propagate(self):
        repo, _, table_client = _repository()
        table_client.list_entities.side_effect = ConnectionError("table unavailable")
        with pytest.raises(ConnectionError):
            repo.get_high_water_mark()


class TestPutRecord:

    def test_upsert_replace_with_entity(self):
        repo, _, table_client = _repository()
        repo.put_record(CatalogRecord(identifier=6, fields={"Name": "Alpha"}))

        kwargs = table_client.upsert_entity.call_args.kwargs
        assert kwargs["mode"] == UpdateMode.REPLACE
        assert kwargs["entity"]["RowKey"] == "0000000006"
        assert kwargs["entity"]["Movie_ID"] == 6
        assert kwargs["entity"]["PartitionKey"] == "movies"

    def test_rejects_non_record(self):
        repo, _, _ = _repository()
        with pytest.raises(ContractViolationError):
            repo.put_record({"Movie_ID": 1})


class TestEnsureTable:

    def test_creates_table(self):
        repo, table_service, _ = _repository()
        repo.ensure_table_exists()
        table_service.create_table.assert_called_once_with("Movies")

    def test_existing_table_tolerated(self):
        repo, table_service, _ = _repository()
        table_service.create_table.side_effect = ResourceExistsError("exists")
        repo.ensure_table_exists()
