"""Schema model exports."""

from .schema_records import (
    AttributeRecord,
    EntityRecord,
    ManyToManyRelationshipRecord,
    OneToManyRelationshipRecord,
    OptionRecord,
    OptionSetRecord,
    RelationshipRecord,
    SchemaDocument,
)

__all__ = [
    "AttributeRecord",
    "EntityRecord",
    "ManyToManyRelationshipRecord",
    "OneToManyRelationshipRecord",
    "OptionRecord",
    "OptionSetRecord",
    "RelationshipRecord",
    "SchemaDocument",
]
