"""Schema document JSON encoding and decoding."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

from dataverse_schema_extractor.schema_model import (
    AttributeRecord,
    EntityRecord,
    ManyToManyRelationshipRecord,
    OneToManyRelationshipRecord,
    OptionRecord,
    OptionSetRecord,
    RelationshipRecord,
    SchemaDocument,
)


class SchemaDocumentError(Exception):
    """Raised when a JSON schema document cannot be decoded."""


_DOCUMENT_KEYS = (
    ("ExtractedDate", "extracted_at"),
    ("EnvironmentUrl", "environment_url"),
    ("OrganizationName", "organization_name"),
    ("SolutionName", "solution_name"),
    ("SolutionComponents", "solution_components"),
)
_ENTITY_KEYS = (
    ("LogicalName", "logical_name"),
    ("SchemaName", "schema_name"),
    ("DisplayName", "display_name"),
    ("Description", "description"),
    ("PrimaryIdAttribute", "primary_id_attribute"),
    ("PrimaryNameAttribute", "primary_name_attribute"),
    ("EntitySetName", "entity_set_name"),
    ("IsCustomEntity", "is_custom_entity"),
    ("IsActivity", "is_activity"),
    ("OwnershipType", "ownership_type"),
)
_ATTRIBUTE_KEYS = (
    ("LogicalName", "logical_name"),
    ("SchemaName", "schema_name"),
    ("DisplayName", "display_name"),
    ("Description", "description"),
    ("AttributeType", "attribute_type"),
    ("IsCustomAttribute", "is_custom_attribute"),
    ("IsPrimaryId", "is_primary_id"),
    ("IsPrimaryName", "is_primary_name"),
    ("IsValidForCreate", "is_valid_for_create"),
    ("IsValidForUpdate", "is_valid_for_update"),
    ("IsValidForRead", "is_valid_for_read"),
    ("RequiredLevel", "required_level"),
    ("MaxLength", "max_length"),
    ("Format", "format"),
    ("MinValue", "min_value"),
    ("MaxValue", "max_value"),
    ("Precision", "precision"),
    ("Targets", "targets"),
)
_ONE_TO_MANY_KEYS = (
    ("SchemaName", "schema_name"),
    ("ReferencingEntity", "referencing_entity"),
    ("ReferencingAttribute", "referencing_attribute"),
    ("ReferencedEntity", "referenced_entity"),
    ("ReferencedAttribute", "referenced_attribute"),
    ("IsCustomRelationship", "is_custom_relationship"),
)
_MANY_TO_MANY_KEYS = (
    ("SchemaName", "schema_name"),
    ("Entity1LogicalName", "entity1_logical_name"),
    ("Entity2LogicalName", "entity2_logical_name"),
    ("IntersectEntityName", "intersect_entity_name"),
    ("IsCustomRelationship", "is_custom_relationship"),
)
_RELATIONSHIP_TYPES: dict[str, tuple[type, tuple[tuple[str, str], ...]]] = {
    OneToManyRelationshipRecord.relationship_type: (
        OneToManyRelationshipRecord,
        _ONE_TO_MANY_KEYS,
    ),
    ManyToManyRelationshipRecord.relationship_type: (
        ManyToManyRelationshipRecord,
        _MANY_TO_MANY_KEYS,
    ),
}
_TUPLE_FIELDS = {"solution_components", "targets"}


def encode_schema_document(document: SchemaDocument) -> str:
    """Render the document as indented JSON, omitting absent fields."""
    return json.dumps(_document_payload(document), ensure_ascii=False, indent=2)


def write_schema_document(document: SchemaDocument, output_path: Path | str) -> Path:
    """Write the JSON rendering of the document and return the resolved path."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(encode_schema_document(document), encoding="utf-8")
    return output.resolve()


def decode_schema_document(text: str) -> SchemaDocument:
    """Rebuild a SchemaDocument from its JSON rendering."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SchemaDocumentError(f"Invalid schema document JSON: {exc}") from exc
    mapping = _require_mapping(payload, "schema document")
    try:
        return _document_from_payload(mapping)
    except (KeyError, TypeError, ValueError) as exc:
        raise SchemaDocumentError(f"Malformed schema document: {exc}") from exc


def read_schema_document(input_path: Path | str) -> SchemaDocument:
    """Read and decode a JSON schema document file."""
    path = Path(input_path)
    if not path.exists():
        raise SchemaDocumentError(f"Schema document not found: {path}")
    return decode_schema_document(path.read_text(encoding="utf-8"))


def _document_payload(document: SchemaDocument) -> dict[str, Any]:
    payload = _encode_fields(document, _DOCUMENT_KEYS)
    payload["ExtractedDate"] = document.extracted_at.isoformat()
    payload["Entities"] = [_entity_payload(entity) for entity in document.entities]
    payload["Relationships"] = [
        _relationship_payload(relationship) for relationship in document.relationships
    ]
    return payload


def _entity_payload(entity: EntityRecord) -> dict[str, Any]:
    payload = _encode_fields(entity, _ENTITY_KEYS)
    payload["Attributes"] = [_attribute_payload(attribute) for attribute in entity.attributes]
    return payload


def _attribute_payload(attribute: AttributeRecord) -> dict[str, Any]:
    payload = _encode_fields(attribute, _ATTRIBUTE_KEYS)
    if attribute.option_set is not None:
        payload["OptionSet"] = _option_set_payload(attribute.option_set)
    return payload


def _option_set_payload(option_set: OptionSetRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if option_set.name is not None:
        payload["Name"] = option_set.name
    payload["IsGlobal"] = option_set.is_global
    payload["Options"] = [_option_payload(option) for option in option_set.options]
    return payload


def _option_payload(option: OptionRecord) -> dict[str, Any]:
    payload: dict[str, Any] = {"Value": option.value}
    if option.label is not None:
        payload["Label"] = option.label
    return payload


def _relationship_payload(relationship: RelationshipRecord) -> dict[str, Any]:
    _, keys = _RELATIONSHIP_TYPES[relationship.relationship_type]
    payload: dict[str, Any] = {"RelationshipType": relationship.relationship_type}
    payload.update(_encode_fields(relationship, keys))
    return payload


def _encode_fields(record: Any, keys: Sequence[tuple[str, str]]) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    for json_key, attribute_name in keys:
        value = getattr(record, attribute_name)
        if value is None:
            continue
        payload[json_key] = list(value) if isinstance(value, tuple) else value
    return payload


def _document_from_payload(payload: Mapping[str, Any]) -> SchemaDocument:
    fields = _decode_fields(payload, _DOCUMENT_KEYS)
    fields["extracted_at"] = datetime.fromisoformat(payload["ExtractedDate"])
    fields["entities"] = tuple(
        _entity_from_payload(_require_mapping(item, "entity"))
        for item in _require_list(payload.get("Entities"), "Entities")
    )
    fields["relationships"] = tuple(
        _relationship_from_payload(_require_mapping(item, "relationship"))
        for item in _require_list(payload.get("Relationships"), "Relationships")
    )
    return SchemaDocument(**fields)


def _entity_from_payload(payload: Mapping[str, Any]) -> EntityRecord:
    fields = _decode_fields(payload, _ENTITY_KEYS)
    fields["attributes"] = tuple(
        _attribute_from_payload(_require_mapping(item, "attribute"))
        for item in _require_list(payload.get("Attributes"), "Attributes")
    )
    return EntityRecord(**fields)


def _attribute_from_payload(payload: Mapping[str, Any]) -> AttributeRecord:
    fields = _decode_fields(payload, _ATTRIBUTE_KEYS)
    if payload.get("OptionSet") is not None:
        option_set = _require_mapping(payload["OptionSet"], "option set")
        fields["option_set"] = OptionSetRecord(
            name=option_set.get("Name"),
            is_global=bool(option_set.get("IsGlobal", False)),
            options=tuple(
                OptionRecord(value=int(option["Value"]), label=option.get("Label"))
                for option in (
                    _require_mapping(item, "option")
                    for item in _require_list(option_set.get("Options"), "Options")
                )
            ),
        )
    return AttributeRecord(**fields)


def _relationship_from_payload(payload: Mapping[str, Any]) -> RelationshipRecord:
    relationship_type = payload.get("RelationshipType")
    if relationship_type not in _RELATIONSHIP_TYPES:
        raise SchemaDocumentError(f"Unknown relationship type: {relationship_type}")
    record_cls, keys = _RELATIONSHIP_TYPES[relationship_type]
    return record_cls(**_decode_fields(payload, keys))


def _decode_fields(payload: Mapping[str, Any], keys: Sequence[tuple[str, str]]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for json_key, attribute_name in keys:
        if json_key not in payload or payload[json_key] is None:
            continue
        value = payload[json_key]
        if attribute_name in _TUPLE_FIELDS:
            value = tuple(_require_list(value, json_key))
        fields[attribute_name] = value
    return fields


def _require_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise SchemaDocumentError(f"Expected {label} to be an object.")
    return value


def _require_list(value: Any, label: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaDocumentError(f"Expected {label} to be a list.")
    return value
