"""Option set extraction service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from dataverse_schema_extractor.schema_model import OptionRecord, OptionSetRecord

from .metadata_variants import AttributeVariant, localized_label

_ENUMERATED_VARIANTS = (
    AttributeVariant.PICKLIST,
    AttributeVariant.STATE,
    AttributeVariant.STATUS,
)


def extract_option_set(raw_attribute: Mapping[str, Any]) -> OptionSetRecord | None:
    """Normalize the option set of a choice, state or status attribute.

    Returns None for every other variant and for enumerated attributes that
    carry no option set. State and status option sets are never global.
    """
    variant = AttributeVariant.of(raw_attribute)
    if variant not in _ENUMERATED_VARIANTS:
        return None
    option_set = raw_attribute.get("OptionSet")
    if not isinstance(option_set, Mapping):
        return None

    is_global = bool(option_set.get("IsGlobal") or False)
    if variant is not AttributeVariant.PICKLIST:
        is_global = False

    return OptionSetRecord(
        name=option_set.get("Name"),
        is_global=is_global,
        options=_normalize_options(option_set.get("Options")),
    )


def _normalize_options(raw_options: Any) -> tuple[OptionRecord, ...]:
    if not isinstance(raw_options, Sequence):
        return ()
    options = [
        OptionRecord(
            value=int(option.get("Value") or 0),
            label=localized_label(option.get("Label")),
        )
        for option in raw_options
        if isinstance(option, Mapping)
    ]
    return tuple(sorted(options, key=lambda option: option.value))
