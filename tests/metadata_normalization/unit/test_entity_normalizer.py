"""Entity normalizer tests."""

from __future__ import annotations

from typing import Any

from dataverse_schema_extractor.metadata_normalization import (
    normalize_entity,
    sort_by_logical_name,
)


def _string_attribute(logical_name: str) -> dict[str, Any]:
    return {
        "@odata.type": "#Microsoft.Dynamics.CRM.StringAttributeMetadata",
        "LogicalName": logical_name,
        "SchemaName": logical_name,
        "MaxLength": 100,
    }


def _raw_entity(**extra: Any) -> dict[str, Any]:
    return {
        "LogicalName": "account",
        "SchemaName": "Account",
        "DisplayName": {"UserLocalizedLabel": {"Label": "Account"}},
        "Description": {"UserLocalizedLabel": None},
        "PrimaryIdAttribute": "accountid",
        "PrimaryNameAttribute": "name",
        "EntitySetName": "accounts",
        "IsCustomEntity": False,
        "IsActivity": False,
        "OwnershipType": "UserOwned",
        "Attributes": [
            _string_attribute("name"),
            _string_attribute("accountnumber"),
            _string_attribute("new_region"),
        ],
        **extra,
    }


def test_normalize_entity_maps_fields_and_sorts_attributes() -> None:
    entity = normalize_entity(_raw_entity())

    assert entity.logical_name == "account"
    assert entity.schema_name == "Account"
    assert entity.display_name == "Account"
    assert entity.description is None
    assert entity.primary_id_attribute == "accountid"
    assert entity.primary_name_attribute == "name"
    assert entity.entity_set_name == "accounts"
    assert entity.is_custom_entity is False
    assert entity.ownership_type == "UserOwned"
    assert [attribute.logical_name for attribute in entity.attributes] == [
        "accountnumber",
        "name",
        "new_region",
    ]


def test_normalize_entity_applies_attribute_predicate() -> None:
    entity = normalize_entity(
        _raw_entity(), include_attribute=lambda name: name.startswith("new_")
    )

    assert [attribute.logical_name for attribute in entity.attributes] == ["new_region"]


def test_normalize_entity_without_attributes_has_empty_sequence() -> None:
    entity = normalize_entity(_raw_entity(Attributes=None, IsCustomEntity=None))

    assert entity.attributes == ()
    assert entity.is_custom_entity is False


def test_sort_by_logical_name_orders_raw_items() -> None:
    ordered = sort_by_logical_name(
        [{"LogicalName": "contact"}, {"LogicalName": "account"}, {"LogicalName": "lead"}]
    )

    assert [item["LogicalName"] for item in ordered] == ["account", "contact", "lead"]
