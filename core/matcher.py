# ============================================================================
# MATCHER / ALLOCATOR
# ============================================================================
# STATUS: Core - pair catalog entries with assets and assign identifiers
# PURPOSE: Deterministic name matching and high-water-mark identifier allocation
# EXPORTS: normalize_name, allocate_identifiers, match_assets, check_field_names,
#          build_assignments
# DEPENDENCIES: re
# ============================================================================
"""
Matcher / Allocator.

Matching:
    An entry's Name is normalized by collapsing every whitespace run into the
    separator ("The   Matrix" -> "The_Matrix"). Every classified asset whose
    archive path contains the normalized name is matched to the entry. An
    asset may match several entries when names overlap; matching is per entry
    and never deduplicated. Zero matches is not an error.

Allocation:
    identifier = high_water_mark + position + 1

    The high-water-mark is read once per invocation. There is no locking:
    two invocations racing on the same table can hand out the same
    identifiers. Within one batch identifiers are exactly h+1 .. h+n.

Field names:
    Entry fields become Azure Table properties, so every field written must
    be a valid property name (letter or underscore, then letters, digits or
    underscores, at most 255 characters). Invalid names reject the batch
    before any upload.
"""

import re
from typing import List, Sequence, Tuple

from core.models import (
    RESERVED_ENTITY_KEYS,
    CatalogAssignment,
    CatalogEntry,
    ClassifiedAsset,
    IngestStage,
)
from exceptions import ValidationError

_WHITESPACE = re.compile(r"\s+")
_PROPERTY_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]{0,254}")


def normalize_name(name: str, separator: str = "_") -> str:
    """Collapse each whitespace run into a single separator."""
    return _WHITESPACE.sub(separator, name)


def allocate_identifiers(high_water_mark: int, count: int) -> List[int]:
    """Identifiers h+1 .. h+count."""
    if high_water_mark < 0:
        raise ValueError(f"high_water_mark must be >= 0, got {high_water_mark}")
    return [high_water_mark + position + 1 for position in range(count)]


def match_assets(normalized_name: str,
                 assets: Sequence[ClassifiedAsset]) -> Tuple[ClassifiedAsset, ...]:
    """Assets whose archive path contains the normalized name, in input order."""
    return tuple(asset for asset in assets if normalized_name in asset.path)


def entry_name(entry: CatalogEntry, name_field: str = "Name") -> str:
    """
    Usable name of an entry.

    Raises:
        ValidationError: Name missing, not a string, or blank
    """
    name = entry.get(name_field)
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(
            f"Catalog entry at position {entry.position} has no usable '{name_field}' field",
            stage=IngestStage.ALLOCATED.value
        )
    return name


def check_field_names(entry: CatalogEntry) -> None:
    """
    Reject entry fields that cannot be stored as table properties.

    Fields that are never written (None values and system properties) are
    not checked.

    Raises:
        ValidationError: A written field name is not a valid property name
    """
    invalid = [
        key for key, value in entry.fields.items()
        if value is not None
        and key not in RESERVED_ENTITY_KEYS
        and not _PROPERTY_NAME.fullmatch(key)
    ]
    if invalid:
        raise ValidationError(
            f"Catalog entry at position {entry.position} has field names that are not "
            f"valid table property names: {', '.join(repr(key) for key in invalid)}",
            stage=IngestStage.ALLOCATED.value
        )


def build_assignments(entries: Sequence[CatalogEntry],
                      images: Sequence[ClassifiedAsset],
                      videos: Sequence[ClassifiedAsset],
                      high_water_mark: int,
                      name_field: str = "Name",
                      separator: str = "_") -> List[CatalogAssignment]:
    """
    Pair every entry with its identifier and matched assets.

    All names and field names are validated before any assignment is
    returned, so one bad entry aborts the whole batch.

    Raises:
        ValidationError: An entry lacks a usable name or has a field name
            the table store cannot hold
    """
    names = [entry_name(entry, name_field) for entry in entries]
    for entry in entries:
        check_field_names(entry)
    identifiers = allocate_identifiers(high_water_mark, len(entries))

    assignments = []
    for entry, name, identifier in zip(entries, names, identifiers):
        normalized = normalize_name(name, separator)
        assignments.append(CatalogAssignment(
            entry=entry,
            identifier=identifier,
            normalized_name=normalized,
            images=match_assets(normalized, images),
            videos=match_assets(normalized, videos),
        ))
    return assignments
