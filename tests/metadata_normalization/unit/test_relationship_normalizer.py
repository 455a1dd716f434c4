"""Relationship normalizer tests."""

from __future__ import annotations

from typing import Any

from dataverse_schema_extractor.metadata_normalization import normalize_relationships
from dataverse_schema_extractor.schema_model import (
    ManyToManyRelationshipRecord,
    OneToManyRelationshipRecord,
)


def _one_to_many(schema_name: str, referencing: str, referenced: str) -> dict[str, Any]:
    return {
        "SchemaName": schema_name,
        "ReferencingEntity": referencing,
        "ReferencingAttribute": f"{referenced}id",
        "ReferencedEntity": referenced,
        "ReferencedAttribute": f"{referenced}id",
        "IsCustomRelationship": False,
    }


def _many_to_many(schema_name: str, entity1: str, entity2: str) -> dict[str, Any]:
    return {
        "SchemaName": schema_name,
        "Entity1LogicalName": entity1,
        "Entity2LogicalName": entity2,
        "IntersectEntityName": schema_name.lower(),
        "IsCustomRelationship": True,
    }


def test_relationships_keep_one_to_many_before_many_to_many_per_entity() -> None:
    relationships = normalize_relationships(
        [
            {
                "LogicalName": "account",
                "OneToManyRelationships": [_one_to_many("contact_account", "contact", "account")],
                "ManyToManyRelationships": [
                    _many_to_many("new_account_contact", "account", "contact")
                ],
            },
            {
                "LogicalName": "contact",
                "OneToManyRelationships": [_one_to_many("lead_contact", "lead", "contact")],
                "ManyToManyRelationships": [],
            },
        ]
    )

    assert [relationship.schema_name for relationship in relationships] == [
        "contact_account",
        "new_account_contact",
        "lead_contact",
    ]
    assert isinstance(relationships[0], OneToManyRelationshipRecord)
    assert relationships[0].referencing_entity == "contact"
    assert relationships[0].referenced_attribute == "accountid"
    assert isinstance(relationships[1], ManyToManyRelationshipRecord)
    assert relationships[1].intersect_entity_name == "new_account_contact"
    assert relationships[1].is_custom_relationship is True


def test_many_to_many_reported_on_both_entities_is_emitted_once() -> None:
    shared = _many_to_many("new_account_contact", "account", "contact")
    relationships = normalize_relationships(
        [
            {"LogicalName": "account", "ManyToManyRelationships": [shared]},
            {"LogicalName": "contact", "ManyToManyRelationships": [dict(shared)]},
        ]
    )

    assert len(relationships) == 1
    assert relationships[0].relationship_type == "ManyToMany"


def test_entities_without_relationship_facets_yield_nothing() -> None:
    assert normalize_relationships([{"LogicalName": "account"}]) == ()
