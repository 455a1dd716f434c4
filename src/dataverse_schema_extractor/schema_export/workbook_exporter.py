"""Excel workbook rendering of a schema document."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from dataverse_schema_extractor.schema_model import EntityRecord, SchemaDocument

from .constants import (
    ALL_METADATA_LABEL,
    ATTRIBUTE_COLUMNS,
    DEFAULT_WORKBOOK_TITLE,
    ENTITY_LIST_COLUMNS,
    INVALID_SHEET_NAME_CHARACTERS,
    MAX_SHEET_NAME_LENGTH,
    OPTION_SET_COLUMNS,
    OPTION_SETS_SHEET_NAME,
    SUMMARY_SHEET_NAME,
    TIMESTAMP_FORMAT,
)

_LABEL_FONT = Font(bold=True)
_HEADER_FILL = PatternFill(start_color="ADD8E6", end_color="ADD8E6", fill_type="solid")


def write_schema_workbook(document: SchemaDocument, output_path: Path | str) -> Path:
    """Write a Summary sheet, one sheet per entity and an Option Sets sheet."""
    workbook = Workbook()
    summary = workbook.active
    if summary is None:
        raise RuntimeError("Workbook active sheet is not available.")
    assert isinstance(summary, Worksheet)
    summary.title = SUMMARY_SHEET_NAME
    _write_summary_sheet(summary, document)

    used_names = {SUMMARY_SHEET_NAME.lower(), OPTION_SETS_SHEET_NAME.lower()}
    for entity in _sorted_entities(document.entities):
        sheet = workbook.create_sheet(entity_sheet_name(entity.logical_name, used_names))
        _write_entity_sheet(sheet, entity)

    _write_option_sets_sheet(workbook.create_sheet(OPTION_SETS_SHEET_NAME), document)

    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(output)
    return output.resolve()


def entity_sheet_name(logical_name: str, used_names: set[str]) -> str:
    """Return a worksheet title for an entity and reserve it in ``used_names``.

    Titles are truncated to the 31 character limit, characters Excel rejects
    become underscores, and case-insensitive clashes get a numeric suffix.
    """
    base = _sanitize_sheet_name(logical_name[:MAX_SHEET_NAME_LENGTH]) or "entity"
    candidate = base
    counter = 2
    while candidate.lower() in used_names:
        suffix = f"~{counter}"
        candidate = base[: MAX_SHEET_NAME_LENGTH - len(suffix)] + suffix
        counter += 1
    used_names.add(candidate.lower())
    return candidate


def _sanitize_sheet_name(name: str) -> str:
    for character in INVALID_SHEET_NAME_CHARACTERS:
        name = name.replace(character, "_")
    return name


def _write_summary_sheet(sheet: Worksheet, document: SchemaDocument) -> None:
    sheet.cell(row=1, column=1, value=document.solution_name or DEFAULT_WORKBOOK_TITLE)
    sheet.cell(row=1, column=1).style = "Title"

    _write_label_rows(
        sheet,
        start_row=3,
        entries=(
            ("Environment:", document.environment_url),
            ("Organization:", document.organization_name),
            ("Solution:", document.solution_name or ALL_METADATA_LABEL),
            ("Extracted:", document.extracted_at.strftime(TIMESTAMP_FORMAT)),
        ),
    )

    _write_section_title(sheet, 8, "Statistics:")
    _write_label_rows(
        sheet,
        start_row=9,
        entries=(
            ("Total Entities:", len(document.entities)),
            ("Total Attributes:", document.attribute_count),
            ("Total Relationships:", len(document.relationships)),
        ),
    )

    _write_section_title(sheet, 13, "Entities")
    rows = (
        (
            entity.logical_name,
            entity.display_name or "",
            len(entity.attributes),
            _yes_no(entity.is_custom_entity),
            _yes_no(entity.is_activity),
        )
        for entity in _sorted_entities(document.entities)
    )
    _write_table(sheet, header_row=14, columns=ENTITY_LIST_COLUMNS, rows=rows)
    _fit_columns(sheet)


def _write_entity_sheet(sheet: Worksheet, entity: EntityRecord) -> None:
    _write_section_title(sheet, 1, "Entity Information")
    _write_label_rows(
        sheet,
        start_row=2,
        entries=(
            ("Logical Name:", entity.logical_name),
            ("Display Name:", entity.display_name or ""),
            ("Schema Name:", entity.schema_name),
            ("Is Custom Entity:", _yes_no(entity.is_custom_entity)),
            ("Is Activity:", _yes_no(entity.is_activity)),
            ("Primary ID:", entity.primary_id_attribute or ""),
            ("Primary Name:", entity.primary_name_attribute or ""),
            ("Ownership Type:", entity.ownership_type or ""),
            ("Description:", entity.description or ""),
        ),
    )

    _write_section_title(sheet, 12, "Attributes")
    rows = (
        (
            attribute.logical_name,
            attribute.display_name or "",
            attribute.attribute_type or "",
            attribute.description or "",
            attribute.required_level or "",
            _yes_no(attribute.is_custom_attribute),
            attribute.max_length,
            attribute.format or "",
            attribute.min_value,
            attribute.max_value,
            ", ".join(attribute.targets) if attribute.targets is not None else "",
        )
        for attribute in sorted(entity.attributes, key=lambda item: item.logical_name)
    )
    _write_table(sheet, header_row=13, columns=ATTRIBUTE_COLUMNS, rows=rows)
    _fit_columns(sheet)


def _write_option_sets_sheet(sheet: Worksheet, document: SchemaDocument) -> None:
    _write_table(sheet, header_row=1, columns=OPTION_SET_COLUMNS, rows=_option_rows(document))
    _fit_columns(sheet)


def _option_rows(document: SchemaDocument) -> Iterable[tuple[Any, ...]]:
    for entity in _sorted_entities(document.entities):
        attributes = sorted(
            (attribute for attribute in entity.attributes if attribute.option_set is not None),
            key=lambda item: item.logical_name,
        )
        for attribute in attributes:
            option_set = attribute.option_set
            assert option_set is not None
            options = sorted(option_set.options, key=lambda option: option.value)
            for index, option in enumerate(options):
                first = index == 0
                yield (
                    entity.logical_name,
                    attribute.logical_name,
                    (option_set.name or "") if first else None,
                    _yes_no(option_set.is_global) if first else None,
                    option.value,
                    option.label or "",
                )


def _write_section_title(sheet: Worksheet, row: int, title: str) -> None:
    sheet.cell(row=row, column=1, value=title)
    sheet.cell(row=row, column=1).style = "Headline 2"


def _write_label_rows(
    sheet: Worksheet, *, start_row: int, entries: Sequence[tuple[str, Any]]
) -> None:
    for row, (label, value) in enumerate(entries, start=start_row):
        sheet.cell(row=row, column=1, value=label).font = _LABEL_FONT
        sheet.cell(row=row, column=2, value=value)


def _write_table(
    sheet: Worksheet,
    *,
    header_row: int,
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
) -> None:
    for column_index, name in enumerate(columns, start=1):
        cell = sheet.cell(row=header_row, column=column_index, value=name)
        cell.font = _LABEL_FONT
        cell.fill = _HEADER_FILL
    for row_index, values in enumerate(rows, start=header_row + 1):
        for column_index, value in enumerate(values, start=1):
            sheet.cell(row=row_index, column=column_index, value=value)


def _fit_columns(sheet: Worksheet) -> None:
    for column_cells in sheet.iter_cols(min_row=1, max_row=sheet.max_row):
        lengths = [len(str(cell.value)) for cell in column_cells if cell.value is not None]
        if not lengths:
            continue
        letter = get_column_letter(column_cells[0].column)
        sheet.column_dimensions[letter].width = max(12, min(max(lengths) + 4, 60))


def _sorted_entities(entities: Iterable[EntityRecord]) -> list[EntityRecord]:
    return sorted(entities, key=lambda entity: entity.logical_name)


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"
