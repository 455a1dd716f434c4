"""Extraction run use-case service."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from dataverse_schema_extractor.configuration import Configuration, OutputFormat, OutputSettings
from dataverse_schema_extractor.metadata_service import MetadataService
from dataverse_schema_extractor.schema_export import export_schema, infer_output_format
from dataverse_schema_extractor.schema_model import SchemaDocument

from .extraction_contracts import AttributeFilter, ExtractionRequest, ProgressObserver
from .extraction_orchestrator import extract_schema

DEFAULT_OUTPUT_STEM = "dataverse-schema"


@dataclass(frozen=True)
class ExtractionOutcome:
    """Output contract for one completed extraction run."""

    output_path: Path
    output_format: OutputFormat
    document: SchemaDocument


def run_extraction(
    configuration: Configuration,
    metadata_service: MetadataService,
    *,
    progress: ProgressObserver | None = None,
) -> ExtractionOutcome:
    """Extract the configured schema and render it to the configured output."""
    settings = configuration.extraction
    request = ExtractionRequest(
        solution_name=settings.solution,
        attribute_filter=AttributeFilter(
            prefix=settings.attribute_prefix,
            excluded=settings.exclude_attributes,
        ),
        parallelism=settings.parallelism,
    )
    document = extract_schema(metadata_service, request, progress=progress)
    output_path, output_format = resolve_output_target(
        configuration.output, request.scoped_solution
    )
    written_path = export_schema(document, output_path, output_format)
    return ExtractionOutcome(
        output_path=written_path,
        output_format=output_format,
        document=document,
    )


def resolve_output_target(
    output: OutputSettings, solution_name: str | None
) -> tuple[Path, OutputFormat]:
    """Pick the output format and path, naming the file after the solution by default."""
    output_format = (
        output.format
        or (infer_output_format(output.path) if output.path is not None else None)
        or OutputFormat.JSON
    )
    if output.path is not None:
        return output.path, output_format
    stem = f"{DEFAULT_OUTPUT_STEM}-{solution_name}" if solution_name else DEFAULT_OUTPUT_STEM
    return Path(f"{stem}{output_format.extension}"), output_format
