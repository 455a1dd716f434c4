"""Schema document JSON codec tests."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import pytest
from dataverse_schema_extractor.schema_export import (
    SchemaDocumentError,
    decode_schema_document,
    encode_schema_document,
    read_schema_document,
    write_schema_document,
)
from dataverse_schema_extractor.schema_model import (
    AttributeRecord,
    EntityRecord,
    ManyToManyRelationshipRecord,
    OneToManyRelationshipRecord,
    OptionRecord,
    OptionSetRecord,
    SchemaDocument,
)


def _document() -> SchemaDocument:
    return SchemaDocument(
        extracted_at=datetime(2024, 5, 1, 8, 30, tzinfo=UTC),
        environment_url="https://org.crm.dynamics.com",
        organization_name="Contoso",
        solution_name="Projects",
        solution_components=("new_project",),
        entities=(
            EntityRecord(
                logical_name="new_project",
                schema_name="new_Project",
                display_name="Project",
                is_custom_entity=True,
                attributes=(
                    AttributeRecord(
                        logical_name="new_budget",
                        schema_name="new_Budget",
                        attribute_type="Money",
                        min_value=0.0,
                        max_value=1000000.0,
                        precision=2,
                    ),
                    AttributeRecord(
                        logical_name="new_ownerid",
                        schema_name="new_OwnerId",
                        attribute_type="Lookup",
                        targets=("systemuser", "team"),
                    ),
                    AttributeRecord(
                        logical_name="new_stage",
                        schema_name="new_Stage",
                        attribute_type="Picklist",
                        option_set=OptionSetRecord(
                            name=None,
                            is_global=False,
                            options=(OptionRecord(0), OptionRecord(1, "Planning")),
                        ),
                    ),
                ),
            ),
        ),
        relationships=(
            OneToManyRelationshipRecord(
                schema_name="new_project_account",
                referencing_entity="new_project",
                referencing_attribute="new_accountid",
                referenced_entity="account",
                referenced_attribute="accountid",
            ),
            ManyToManyRelationshipRecord(
                schema_name="new_project_contact",
                entity1_logical_name="new_project",
                entity2_logical_name="contact",
                intersect_entity_name="new_project_contact",
                is_custom_relationship=True,
            ),
        ),
    )


def test_encode_uses_pascal_case_keys_and_omits_absent_fields() -> None:
    payload = json.loads(encode_schema_document(_document()))

    assert payload["ExtractedDate"] == "2024-05-01T08:30:00+00:00"
    assert payload["SolutionComponents"] == ["new_project"]
    entity = payload["Entities"][0]
    assert "Description" not in entity
    budget, owner, stage = entity["Attributes"]
    assert budget["MinValue"] == 0.0
    assert budget["Precision"] == 2
    assert "MaxLength" not in budget
    assert "Targets" not in budget
    assert "OptionSet" not in budget
    assert owner["Targets"] == ["systemuser", "team"]
    assert stage["OptionSet"] == {
        "IsGlobal": False,
        "Options": [{"Value": 0}, {"Value": 1, "Label": "Planning"}],
    }
    assert payload["Relationships"][0]["RelationshipType"] == "OneToMany"
    assert payload["Relationships"][1]["RelationshipType"] == "ManyToMany"
    assert "ReferencingEntity" not in payload["Relationships"][1]


def test_encode_without_solution_omits_solution_fields() -> None:
    document = SchemaDocument(
        extracted_at=datetime(2024, 5, 1, tzinfo=UTC),
        environment_url="https://org.crm.dynamics.com",
        organization_name="Contoso",
    )

    payload = json.loads(encode_schema_document(document))

    assert "SolutionName" not in payload
    assert "SolutionComponents" not in payload
    assert payload["Entities"] == []
    assert payload["Relationships"] == []


def test_decode_restores_encoded_document() -> None:
    document = _document()

    assert decode_schema_document(encode_schema_document(document)) == document


def test_write_and_read_schema_document(tmp_path: Path) -> None:
    output_path = tmp_path / "nested" / "schema.json"

    written_path = write_schema_document(_document(), output_path)

    assert written_path == output_path.resolve()
    assert read_schema_document(written_path) == _document()


def test_decode_rejects_invalid_json() -> None:
    with pytest.raises(SchemaDocumentError, match="Invalid schema document JSON"):
        decode_schema_document("{not json")


def test_decode_rejects_missing_required_fields() -> None:
    with pytest.raises(SchemaDocumentError, match="Malformed schema document"):
        decode_schema_document(json.dumps({"EnvironmentUrl": "https://org.crm.dynamics.com"}))


def test_decode_rejects_unknown_relationship_type() -> None:
    payload = json.loads(encode_schema_document(_document()))
    payload["Relationships"][0]["RelationshipType"] = "OneToOne"

    with pytest.raises(SchemaDocumentError, match="Unknown relationship type: OneToOne"):
        decode_schema_document(json.dumps(payload))


def test_read_schema_document_fails_for_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SchemaDocumentError, match="not found"):
        read_schema_document(tmp_path / "missing.json")
