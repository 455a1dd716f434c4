"""Format selection for schema document rendering."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from dataverse_schema_extractor.configuration.runtime_settings import OutputFormat
from dataverse_schema_extractor.schema_model import SchemaDocument

from .csv_exporter import write_schema_csv
from .json_document_codec import write_schema_document
from .workbook_exporter import write_schema_workbook

_WRITERS: dict[OutputFormat, Callable[[SchemaDocument, Path | str], Path]] = {
    OutputFormat.JSON: write_schema_document,
    OutputFormat.XLSX: write_schema_workbook,
    OutputFormat.CSV: write_schema_csv,
}


def export_schema(
    document: SchemaDocument, output_path: Path | str, output_format: OutputFormat
) -> Path:
    """Render the document in the requested format and return the resolved path."""
    return _WRITERS[output_format](document, output_path)


def infer_output_format(output_path: Path | str) -> OutputFormat | None:
    """Map a file extension onto an output format."""
    suffix = Path(output_path).suffix.lower().lstrip(".")
    try:
        return OutputFormat(suffix)
    except ValueError:
        return None
