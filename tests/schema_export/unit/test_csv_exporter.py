"""CSV exporter tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from dataverse_schema_extractor.schema_export import encode_schema_csv, write_schema_csv
from dataverse_schema_extractor.schema_model import AttributeRecord, EntityRecord, SchemaDocument


def _document() -> SchemaDocument:
    return SchemaDocument(
        extracted_at=datetime(2024, 5, 1, tzinfo=UTC),
        environment_url="https://org.crm.dynamics.com",
        organization_name="Contoso",
        entities=(
            EntityRecord(
                logical_name="contact",
                schema_name="Contact",
                attributes=(
                    AttributeRecord(
                        logical_name="parentcustomerid",
                        schema_name="ParentCustomerId",
                        display_name="Company Name",
                        attribute_type="Customer",
                        required_level="None",
                        targets=("account", "contact"),
                    ),
                ),
            ),
            EntityRecord(
                logical_name="account",
                schema_name="Account",
                attributes=(
                    AttributeRecord(
                        logical_name="name",
                        schema_name="Name",
                        display_name="Account Name",
                        description='The "legal" name',
                        attribute_type="String",
                        required_level="ApplicationRequired",
                        is_custom_attribute=True,
                        max_length=160,
                        format="Text",
                    ),
                ),
            ),
        ),
    )


def test_encode_schema_csv_writes_header_and_quoted_rows() -> None:
    lines = encode_schema_csv(_document()).splitlines()

    assert lines == [
        '"Entity","Attribute","Display Name","Type","Description","Required Level",'
        '"Is Custom","Max Length","Format","Targets"',
        '"account","name","Account Name","String","The ""legal"" name",'
        '"ApplicationRequired","Yes","160","Text",""',
        '"contact","parentcustomerid","Company Name","Customer","","None","No","","",'
        '"account; contact"',
    ]


def test_encode_schema_csv_without_entities_writes_header_only() -> None:
    document = SchemaDocument(
        extracted_at=datetime(2024, 5, 1, tzinfo=UTC),
        environment_url="https://org.crm.dynamics.com",
        organization_name="Contoso",
    )

    assert encode_schema_csv(document).splitlines() == [
        '"Entity","Attribute","Display Name","Type","Description","Required Level",'
        '"Is Custom","Max Length","Format","Targets"'
    ]


def test_write_schema_csv_creates_parent_directories(tmp_path: Path) -> None:
    output_path = tmp_path / "exports" / "schema.csv"

    written_path = write_schema_csv(_document(), output_path)

    assert written_path == output_path.resolve()
    assert output_path.read_text(encoding="utf-8").startswith('"Entity","Attribute",')
