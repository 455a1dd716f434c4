"""Attribute metadata normalization service.

Dataverse reports each attribute as one of many structurally different
metadata shapes. The rules below pick the type-conditional fields out of the
shape that defines them and leave every other field absent. A bound of zero
is a real value and is never confused with a missing one.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from dataverse_schema_extractor.schema_model import AttributeRecord

from .metadata_variants import (
    AttributeVariant,
    flag,
    localized_label,
    managed_value,
    optional_float,
    optional_int,
    optional_string,
)
from .option_set_extractor import extract_option_set

# Checked in order, first match wins.
_FORMAT_VARIANTS = (AttributeVariant.STRING, AttributeVariant.DATE_TIME)
_NUMERIC_BOUND_VARIANTS = (
    AttributeVariant.INTEGER,
    AttributeVariant.DECIMAL,
    AttributeVariant.DOUBLE,
    AttributeVariant.MONEY,
)
_PRECISION_VARIANTS = (AttributeVariant.DECIMAL, AttributeVariant.MONEY)


def normalize_attribute(raw_attribute: Mapping[str, Any]) -> AttributeRecord:
    """Flatten one raw attribute payload into an AttributeRecord."""
    variant = AttributeVariant.of(raw_attribute)
    return AttributeRecord(
        logical_name=str(raw_attribute.get("LogicalName") or ""),
        schema_name=str(raw_attribute.get("SchemaName") or ""),
        display_name=localized_label(raw_attribute.get("DisplayName")),
        description=localized_label(raw_attribute.get("Description")),
        attribute_type=optional_string(raw_attribute, "AttributeType"),
        is_custom_attribute=flag(raw_attribute, "IsCustomAttribute"),
        is_primary_id=flag(raw_attribute, "IsPrimaryId"),
        is_primary_name=flag(raw_attribute, "IsPrimaryName"),
        is_valid_for_create=flag(raw_attribute, "IsValidForCreate"),
        is_valid_for_update=flag(raw_attribute, "IsValidForUpdate"),
        is_valid_for_read=flag(raw_attribute, "IsValidForRead"),
        required_level=_required_level(raw_attribute),
        max_length=(
            optional_int(raw_attribute, "MaxLength")
            if variant is AttributeVariant.STRING
            else None
        ),
        format=_first_defined(raw_attribute, variant, _FORMAT_VARIANTS, optional_string, "Format"),
        min_value=_first_defined(
            raw_attribute, variant, _NUMERIC_BOUND_VARIANTS, optional_float, "MinValue"
        ),
        max_value=_first_defined(
            raw_attribute, variant, _NUMERIC_BOUND_VARIANTS, optional_float, "MaxValue"
        ),
        precision=_first_defined(
            raw_attribute, variant, _PRECISION_VARIANTS, optional_int, "Precision"
        ),
        option_set=extract_option_set(raw_attribute),
        targets=_lookup_targets(raw_attribute, variant),
    )


def _first_defined(
    raw_attribute: Mapping[str, Any],
    variant: AttributeVariant | None,
    candidates: tuple[AttributeVariant, ...],
    reader: Callable[[Mapping[str, Any], str], Any],
    key: str,
) -> Any:
    for candidate in candidates:
        if variant is not candidate:
            continue
        value = reader(raw_attribute, key)
        if value is not None:
            return value
    return None


def _required_level(raw_attribute: Mapping[str, Any]) -> str | None:
    value = managed_value(raw_attribute.get("RequiredLevel"))
    return None if value is None else str(value)


def _lookup_targets(
    raw_attribute: Mapping[str, Any], variant: AttributeVariant | None
) -> tuple[str, ...] | None:
    if variant is not AttributeVariant.LOOKUP:
        return None
    targets = raw_attribute.get("Targets")
    if targets is None:
        return None
    if isinstance(targets, str) or not isinstance(targets, Sequence):
        return (str(targets),)
    return tuple(str(target) for target in targets)
