# ============================================================================
# METADATA EVALUATOR
# ============================================================================
# STATUS: Core - sandboxed evaluation of the archive's metadata script
# PURPOSE: Extract the ordered catalog entry list from untrusted archive code
# EXPORTS: MetadataEvaluator
# DEPENDENCIES: mini-racer (py_mini_racer), json
# ============================================================================
"""
Metadata Evaluator.

The archive carries one metadata script that binds a well-known top-level
identifier (``testArray`` by default) to an array of catalog entries:

    const testArray = [
        { Name: "The Matrix", Year: 1999, Genre: ["Action", "Sci-Fi"] },
        { Name: "Alpha" },
    ];

Isolation:
    The script runs in a fresh V8 isolate (mini-racer). The isolate has no
    host bindings at all: no ``process``, no ``require``, no filesystem,
    network or environment access. Only the JSON text produced by
    ``JSON.stringify`` inside the isolate crosses back into Python, and it is
    checked against the expected shape before anything trusts it. Every
    evaluation is bounded by a wall-clock timeout and a heap limit.

Declarative path:
    When the configured metadata extension is ``.json`` no code runs; the
    document is either the entry array or an object holding it under the
    well-known key.
"""

import json
from typing import Any, Callable, List, Optional

from py_mini_racer import MiniRacer, JSEvalException, JSOOMException, JSTimeoutException

from config import CatalogConfig, SandboxConfig
from core.archive import ArchiveContents, ArchiveEntry
from core.models import CatalogEntry, IngestStage
from exceptions import MetadataEvalError, ValidationError
from util_logger import LoggerFactory, ComponentType

logger = LoggerFactory.create_logger(ComponentType.CORE, "MetadataEvaluator")

_STAGE = IngestStage.EVALUATED.value

# Appended after the script. Yields null when the symbol was never bound.
_EXTRACT_TEMPLATE = """
;(function () {{
  if (typeof {symbol} === 'undefined') {{ return null; }}
  return JSON.stringify({symbol});
}})()
"""


class MetadataEvaluator:
    """
    Locates and evaluates the metadata script of an archive.

    Args:
        catalog: Naming conventions (extension, symbol)
        sandbox: Evaluation limits
        runtime_factory: Creates a fresh JS runtime per evaluation
    """

    def __init__(self, catalog: CatalogConfig, sandbox: SandboxConfig,
                 runtime_factory: Callable[[], MiniRacer] = MiniRacer):
        self.catalog = catalog
        self.sandbox = sandbox
        self.runtime_factory = runtime_factory

    @property
    def is_declarative(self) -> bool:
        return self.catalog.metadata_extension == ".json"

    # ========================================================================
    # LOCATE
    # ========================================================================

    def locate(self, archive: ArchiveContents) -> Optional[ArchiveEntry]:
        """First member whose path ends in the metadata extension, or None."""
        extension = self.catalog.metadata_extension
        for path, entry in archive.items():
            if path.lower().endswith(extension):
                return entry
        return None

    # ========================================================================
    # EVALUATE
    # ========================================================================

    def evaluate(self, archive: ArchiveContents) -> List[CatalogEntry]:
        """
        Locate the metadata member and evaluate it.

        Raises:
            ValidationError: Archive has no metadata member
            MetadataEvalError: Evaluation failed or returned the wrong shape
        """
        member = self.locate(archive)
        if member is None:
            raise ValidationError(
                f"No metadata file ({self.catalog.metadata_extension}) found in the archive",
                stage=_STAGE
            )

        if member.size > self.sandbox.max_script_bytes:
            raise MetadataEvalError(
                f"Metadata file '{member.path}' is {member.size} bytes "
                f"(limit {self.sandbox.max_script_bytes})",
                stage=_STAGE
            )

        try:
            source = member.read_text()
        except UnicodeDecodeError as e:
            raise MetadataEvalError(
                f"Metadata file '{member.path}' is not valid UTF-8: {e}",
                stage=_STAGE,
                cause=e
            ) from e

        logger.info(f"📜 Evaluating metadata file: {member.path}")
        entries = self.evaluate_source(source)
        logger.info(f"Items in the metadata file: {len(entries)}")
        return entries

    def evaluate_source(self, source: str) -> List[CatalogEntry]:
        """Evaluate metadata source text into ordered catalog entries."""
        if self.is_declarative:
            value = self._parse_declarative(source)
        else:
            value = self._run_sandboxed(source)
        return self._to_entries(value)

    def _run_sandboxed(self, source: str) -> Any:
        symbol = self.catalog.metadata_symbol
        script = f"{source}\n{_EXTRACT_TEMPLATE.format(symbol=symbol)}"

        try:
            with self.runtime_factory() as runtime:
                result = runtime.eval(
                    script,
                    timeout_sec=self.sandbox.eval_timeout_seconds,
                    max_memory=self.sandbox.max_memory_bytes,
                )
        except JSTimeoutException as e:
            raise MetadataEvalError(
                f"Metadata script exceeded {self.sandbox.eval_timeout_seconds}s evaluation limit",
                stage=_STAGE,
                cause=e
            ) from e
        except JSOOMException as e:
            raise MetadataEvalError(
                "Metadata script exceeded the sandbox memory limit",
                stage=_STAGE,
                cause=e
            ) from e
        except JSEvalException as e:
            raise MetadataEvalError(
                f"Metadata script failed: {e}",
                stage=_STAGE,
                cause=e
            ) from e

        if result is None:
            raise MetadataEvalError(
                f"Metadata script did not define '{symbol}'",
                stage=_STAGE
            )
        if not isinstance(result, str):
            # JSON.stringify yields undefined for functions and symbols
            raise MetadataEvalError(
                f"'{symbol}' is not serialisable data",
                stage=_STAGE
            )
        try:
            return json.loads(result)
        except json.JSONDecodeError as e:
            # JSON.stringify was replaced by the script
            raise MetadataEvalError(
                f"'{symbol}' did not serialise to JSON: {e}",
                stage=_STAGE,
                cause=e
            ) from e

    def _parse_declarative(self, source: str) -> Any:
        symbol = self.catalog.metadata_symbol
        try:
            document = json.loads(source)
        except json.JSONDecodeError as e:
            raise MetadataEvalError(
                f"Metadata document is not valid JSON: {e}",
                stage=_STAGE,
                cause=e
            ) from e

        if isinstance(document, dict):
            if symbol not in document:
                raise MetadataEvalError(
                    f"Metadata document has no '{symbol}' key",
                    stage=_STAGE
                )
            return document[symbol]
        return document

    def _to_entries(self, value: Any) -> List[CatalogEntry]:
        symbol = self.catalog.metadata_symbol
        if not isinstance(value, list):
            raise MetadataEvalError(
                f"'{symbol}' must be an array, got {type(value).__name__}",
                stage=_STAGE
            )

        entries = []
        for position, item in enumerate(value):
            if not isinstance(item, dict):
                raise MetadataEvalError(
                    f"'{symbol}[{position}]' must be an object, got {type(item).__name__}",
                    stage=_STAGE
                )
            entries.append(CatalogEntry(position=position, fields=item))
        return entries
