"""
Infrastructure Package - Lazy Loading Implementation.

Repository implementations are imported on first attribute access so that
importing function_app.py never reads configuration or builds Azure clients
before the Functions host has set the environment.

Exports:
    RepositoryFactory: Central factory
    IBlobRepository, BlobRepository: Blob storage
    ICatalogTableRepository, CatalogTableRepository: Catalog table
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .factory import RepositoryFactory as _RepositoryFactory
    from .blob import BlobRepository as _BlobRepository
    from .catalog_table import CatalogTableRepository as _CatalogTableRepository

_LAZY_IMPORTS = {
    'RepositoryFactory': '.factory',
    'IBlobRepository': '.blob',
    'BlobRepository': '.blob',
    'ICatalogTableRepository': '.catalog_table',
    'CatalogTableRepository': '.catalog_table',
}


def __getattr__(name: str):
    """Lazy import repository classes on first access."""
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package=__name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = list(_LAZY_IMPORTS)
