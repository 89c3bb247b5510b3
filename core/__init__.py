"""
Core Catalog Ingestion Components.

Pure pipeline logic with no Azure SDK dependencies. Everything here operates
on bytes, pydantic models and plain Python values so it can be exercised
without storage backends.

Structure:
    models/: Pure data structures (no business logic)
    logic/: Stage transition rules
    archive.py: Archive Reader
    metadata.py: Metadata Evaluator (sandboxed)
    classifier.py: Asset Classifier
    matcher.py: Matcher/Allocator

Exports:
    ArchiveReader, ArchiveEntry
    MetadataEvaluator
    AssetClassifier
    normalize_name, allocate_identifiers, build_assignments
"""

from . import models
from . import logic

_LAZY_IMPORTS = {
    'ArchiveReader': '.archive',
    'ArchiveEntry': '.archive',
    'MetadataEvaluator': '.metadata',
    'AssetClassifier': '.classifier',
    'normalize_name': '.matcher',
    'allocate_identifiers': '.matcher',
    'build_assignments': '.matcher',
}


def __getattr__(name):
    """Lazy import core components so `import core` stays cheap."""
    if name in _LAZY_IMPORTS:
        from importlib import import_module
        module = import_module(_LAZY_IMPORTS[name], package='core')
        return getattr(module, name)
    raise AttributeError(f"module 'core' has no attribute '{name}'")


__all__ = [
    'ArchiveReader',
    'ArchiveEntry',
    'MetadataEvaluator',
    'AssetClassifier',
    'normalize_name',
    'allocate_identifiers',
    'build_assignments',
    'models',
    'logic',
]
