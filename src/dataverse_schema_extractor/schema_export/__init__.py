"""Schema export exports."""

from .constants import OPTION_SETS_SHEET_NAME, SUMMARY_SHEET_NAME
from .csv_exporter import encode_schema_csv, write_schema_csv
from .document_export import export_schema, infer_output_format
from .json_document_codec import (
    SchemaDocumentError,
    decode_schema_document,
    encode_schema_document,
    read_schema_document,
    write_schema_document,
)
from .workbook_exporter import entity_sheet_name, write_schema_workbook

__all__ = [
    "OPTION_SETS_SHEET_NAME",
    "SUMMARY_SHEET_NAME",
    "SchemaDocumentError",
    "decode_schema_document",
    "encode_schema_csv",
    "encode_schema_document",
    "entity_sheet_name",
    "export_schema",
    "infer_output_format",
    "read_schema_document",
    "write_schema_csv",
    "write_schema_document",
    "write_schema_workbook",
]
