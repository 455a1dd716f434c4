"""Schema document entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar


@dataclass(frozen=True)
class OptionRecord:
    """One value of an option set."""

    value: int
    label: str | None = None


@dataclass(frozen=True)
class OptionSetRecord:
    """Enumerated value domain attached to a choice, state or status attribute."""

    name: str | None
    is_global: bool
    options: tuple[OptionRecord, ...] = ()


@dataclass(frozen=True)
class AttributeRecord:  # pylint: disable=too-many-instance-attributes
    """Flattened attribute metadata.

    Fields after ``required_level`` are type-conditional: they stay ``None``
    unless the source attribute variant defines them.
    """

    logical_name: str
    schema_name: str
    display_name: str | None = None
    description: str | None = None
    attribute_type: str | None = None
    is_custom_attribute: bool = False
    is_primary_id: bool = False
    is_primary_name: bool = False
    is_valid_for_create: bool = False
    is_valid_for_update: bool = False
    is_valid_for_read: bool = False
    required_level: str | None = None
    max_length: int | None = None
    format: str | None = None
    min_value: float | None = None
    max_value: float | None = None
    precision: int | None = None
    option_set: OptionSetRecord | None = None
    targets: tuple[str, ...] | None = None


@dataclass(frozen=True)
class EntityRecord:  # pylint: disable=too-many-instance-attributes
    """Entity metadata with its attributes ordered by logical name."""

    logical_name: str
    schema_name: str
    display_name: str | None = None
    description: str | None = None
    primary_id_attribute: str | None = None
    primary_name_attribute: str | None = None
    entity_set_name: str | None = None
    is_custom_entity: bool = False
    is_activity: bool = False
    ownership_type: str | None = None
    attributes: tuple[AttributeRecord, ...] = ()


@dataclass(frozen=True)
class OneToManyRelationshipRecord:
    """Relationship where one referenced record is referenced by many records."""

    relationship_type: ClassVar[str] = "OneToMany"

    schema_name: str
    referencing_entity: str | None = None
    referencing_attribute: str | None = None
    referenced_entity: str | None = None
    referenced_attribute: str | None = None
    is_custom_relationship: bool = False


@dataclass(frozen=True)
class ManyToManyRelationshipRecord:
    """Relationship between two entities through an intersect entity."""

    relationship_type: ClassVar[str] = "ManyToMany"

    schema_name: str
    entity1_logical_name: str | None = None
    entity2_logical_name: str | None = None
    intersect_entity_name: str | None = None
    is_custom_relationship: bool = False


RelationshipRecord = OneToManyRelationshipRecord | ManyToManyRelationshipRecord


@dataclass(frozen=True)
class SchemaDocument:  # pylint: disable=too-many-instance-attributes
    """Root of one extraction run."""

    extracted_at: datetime
    environment_url: str
    organization_name: str
    solution_name: str | None = None
    solution_components: tuple[str, ...] | None = None
    entities: tuple[EntityRecord, ...] = ()
    relationships: tuple[RelationshipRecord, ...] = ()

    @property
    def attribute_count(self) -> int:
        """Total number of attributes across all entities."""
        return sum(len(entity.attributes) for entity in self.entities)
