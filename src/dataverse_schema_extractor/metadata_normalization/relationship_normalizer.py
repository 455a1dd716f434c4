"""Relationship metadata normalization service."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from dataverse_schema_extractor.schema_model import (
    ManyToManyRelationshipRecord,
    OneToManyRelationshipRecord,
    RelationshipRecord,
)

from .metadata_variants import flag


def normalize_relationships(
    raw_entities: Iterable[Mapping[str, Any]],
) -> tuple[RelationshipRecord, ...]:
    """Collect one-to-many then many-to-many relationships of every entity.

    A schema name is emitted once; many-to-many relationships are reported on
    both participating entities and the first occurrence is kept.
    """
    relationships: list[RelationshipRecord] = []
    seen_schema_names: set[str] = set()
    for raw_entity in raw_entities:
        candidates: list[RelationshipRecord] = [
            normalize_one_to_many(raw)
            for raw in raw_entity.get("OneToManyRelationships") or ()
        ]
        candidates.extend(
            normalize_many_to_many(raw)
            for raw in raw_entity.get("ManyToManyRelationships") or ()
        )
        for relationship in candidates:
            if relationship.schema_name in seen_schema_names:
                continue
            seen_schema_names.add(relationship.schema_name)
            relationships.append(relationship)
    return tuple(relationships)


def normalize_one_to_many(raw: Mapping[str, Any]) -> OneToManyRelationshipRecord:
    return OneToManyRelationshipRecord(
        schema_name=str(raw.get("SchemaName") or ""),
        referencing_entity=raw.get("ReferencingEntity"),
        referencing_attribute=raw.get("ReferencingAttribute"),
        referenced_entity=raw.get("ReferencedEntity"),
        referenced_attribute=raw.get("ReferencedAttribute"),
        is_custom_relationship=flag(raw, "IsCustomRelationship"),
    )


def normalize_many_to_many(raw: Mapping[str, Any]) -> ManyToManyRelationshipRecord:
    return ManyToManyRelationshipRecord(
        schema_name=str(raw.get("SchemaName") or ""),
        entity1_logical_name=raw.get("Entity1LogicalName"),
        entity2_logical_name=raw.get("Entity2LogicalName"),
        intersect_entity_name=raw.get("IntersectEntityName"),
        is_custom_relationship=flag(raw, "IsCustomRelationship"),
    )
