"""Entity metadata normalization service."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from dataverse_schema_extractor.schema_model import EntityRecord

from .attribute_normalizer import normalize_attribute
from .metadata_variants import flag, localized_label, optional_string

AttributePredicate = Callable[[str], bool]


def normalize_entity(
    raw_entity: Mapping[str, Any],
    *,
    include_attribute: AttributePredicate | None = None,
) -> EntityRecord:
    """Build an EntityRecord with accepted attributes sorted by logical name."""
    raw_attributes = raw_entity.get("Attributes") or ()
    attributes = []
    for raw_attribute in sorted(raw_attributes, key=_logical_name):
        if include_attribute is not None and not include_attribute(_logical_name(raw_attribute)):
            continue
        attributes.append(normalize_attribute(raw_attribute))

    return EntityRecord(
        logical_name=_logical_name(raw_entity),
        schema_name=str(raw_entity.get("SchemaName") or ""),
        display_name=localized_label(raw_entity.get("DisplayName")),
        description=localized_label(raw_entity.get("Description")),
        primary_id_attribute=raw_entity.get("PrimaryIdAttribute"),
        primary_name_attribute=raw_entity.get("PrimaryNameAttribute"),
        entity_set_name=raw_entity.get("EntitySetName"),
        is_custom_entity=flag(raw_entity, "IsCustomEntity"),
        is_activity=flag(raw_entity, "IsActivity"),
        ownership_type=optional_string(raw_entity, "OwnershipType"),
        attributes=tuple(attributes),
    )


def sort_by_logical_name(raw_items: Sequence[Mapping[str, Any]]) -> list[Mapping[str, Any]]:
    """Return raw metadata items ordered by logical name."""
    return sorted(raw_items, key=_logical_name)


def _logical_name(raw_item: Mapping[str, Any]) -> str:
    return str(raw_item.get("LogicalName") or "")
