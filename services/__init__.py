"""
Catalog Services.

Exports:
    CatalogIngestService: End-to-end archive ingestion (never raises)
    CatalogPersistenceCoordinator: Asset uploads and record writes
"""

from .catalog_persistence import CatalogPersistenceCoordinator, PersistenceProgress
from .catalog_ingest import CatalogIngestService

__all__ = [
    'CatalogIngestService',
    'CatalogPersistenceCoordinator',
    'PersistenceProgress',
]
