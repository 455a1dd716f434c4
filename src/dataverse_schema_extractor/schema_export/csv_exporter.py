"""Flat CSV rendering of entity attributes."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterator
from pathlib import Path

from dataverse_schema_extractor.schema_model import SchemaDocument

from .constants import CSV_COLUMNS


def encode_schema_csv(document: SchemaDocument) -> str:
    """Render one quoted row per entity attribute, ordered by entity then attribute."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    writer.writerows(_attribute_rows(document))
    return buffer.getvalue()


def write_schema_csv(document: SchemaDocument, output_path: Path | str) -> Path:
    """Write the CSV rendering of the document and return the resolved path."""
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(encode_schema_csv(document), encoding="utf-8", newline="")
    return output.resolve()


def _attribute_rows(document: SchemaDocument) -> Iterator[tuple[str, ...]]:
    for entity in sorted(document.entities, key=lambda item: item.logical_name):
        for attribute in sorted(entity.attributes, key=lambda item: item.logical_name):
            yield (
                entity.logical_name,
                attribute.logical_name,
                attribute.display_name or "",
                attribute.attribute_type or "",
                attribute.description or "",
                attribute.required_level or "",
                "Yes" if attribute.is_custom_attribute else "No",
                "" if attribute.max_length is None else str(attribute.max_length),
                attribute.format or "",
                "; ".join(attribute.targets) if attribute.targets is not None else "",
            )
