"""Attribute metadata variant tags and raw-payload accessors."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

ODATA_TYPE_KEY = "@odata.type"
_ODATA_TYPE_PREFIX = "#Microsoft.Dynamics.CRM."


class AttributeVariant(str, Enum):
    """Concrete attribute metadata variants with type-conditional fields."""

    STRING = "StringAttributeMetadata"
    INTEGER = "IntegerAttributeMetadata"
    DECIMAL = "DecimalAttributeMetadata"
    DOUBLE = "DoubleAttributeMetadata"
    MONEY = "MoneyAttributeMetadata"
    DATE_TIME = "DateTimeAttributeMetadata"
    LOOKUP = "LookupAttributeMetadata"
    PICKLIST = "PicklistAttributeMetadata"
    STATE = "StateAttributeMetadata"
    STATUS = "StatusAttributeMetadata"

    @classmethod
    def of(cls, raw: Mapping[str, Any]) -> AttributeVariant | None:
        """Return the variant tagged on a raw attribute, or None when unrecognized."""
        odata_type = raw.get(ODATA_TYPE_KEY)
        if not isinstance(odata_type, str):
            return None
        name = odata_type.removeprefix(_ODATA_TYPE_PREFIX)
        try:
            return cls(name)
        except ValueError:
            return None


def localized_label(value: Any) -> str | None:
    """Extract ``UserLocalizedLabel.Label`` from a Label payload."""
    if not isinstance(value, Mapping):
        return None
    user_label = value.get("UserLocalizedLabel")
    if not isinstance(user_label, Mapping):
        return None
    label = user_label.get("Label")
    return label if isinstance(label, str) else None


def managed_value(value: Any) -> Any:
    """Unwrap ``{"Value": ...}`` managed-property payloads."""
    if isinstance(value, Mapping):
        return value.get("Value")
    return value


def flag(raw: Mapping[str, Any], key: str) -> bool:
    """Read a nullable boolean, treating missing values as False."""
    return bool(managed_value(raw.get(key)) or False)


def optional_string(raw: Mapping[str, Any], key: str) -> str | None:
    value = managed_value(raw.get(key))
    if value is None:
        return None
    return str(value)


def optional_int(raw: Mapping[str, Any], key: str) -> int | None:
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return None
    return int(value)


def optional_float(raw: Mapping[str, Any], key: str) -> float | None:
    value = raw.get(key)
    if value is None or isinstance(value, bool):
        return None
    return float(value)
