"""Shared export constants."""

from __future__ import annotations

SUMMARY_SHEET_NAME = "Summary"
OPTION_SETS_SHEET_NAME = "Option Sets"
DEFAULT_WORKBOOK_TITLE = "Dataverse Schema Export"
ALL_METADATA_LABEL = "(All metadata)"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

MAX_SHEET_NAME_LENGTH = 31
INVALID_SHEET_NAME_CHARACTERS: tuple[str, ...] = (":", "/", "\\", "?", "*", "[", "]")

ENTITY_LIST_COLUMNS: tuple[str, ...] = (
    "Logical Name",
    "Display Name",
    "Attributes",
    "Is Custom",
    "Is Activity",
)
ATTRIBUTE_COLUMNS: tuple[str, ...] = (
    "Logical Name",
    "Display Name",
    "Type",
    "Description",
    "Required",
    "Is Custom",
    "Max Length",
    "Format",
    "Min Value",
    "Max Value",
    "Targets",
)
OPTION_SET_COLUMNS: tuple[str, ...] = (
    "Entity",
    "Attribute",
    "Option Set Name",
    "Is Global",
    "Value",
    "Label",
)
CSV_COLUMNS: tuple[str, ...] = (
    "Entity",
    "Attribute",
    "Display Name",
    "Type",
    "Description",
    "Required Level",
    "Is Custom",
    "Max Length",
    "Format",
    "Targets",
)
