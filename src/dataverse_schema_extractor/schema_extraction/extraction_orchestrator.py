"""Schema extraction use-case service."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from dataverse_schema_extractor.metadata_normalization import (
    normalize_entity,
    normalize_relationships,
    sort_by_logical_name,
)
from dataverse_schema_extractor.metadata_service import MetadataService
from dataverse_schema_extractor.schema_model import EntityRecord, SchemaDocument
from dataverse_schema_extractor.solution_resolution import resolve_solution_entities

from .extraction_contracts import ExtractionRequest, ProgressObserver

logger = logging.getLogger(__name__)


class SchemaExtractionError(Exception):
    """Raised when entity metadata breaks the schema document invariants."""


def extract_schema(
    metadata_service: MetadataService,
    request: ExtractionRequest | None = None,
    *,
    progress: ProgressObserver | None = None,
    clock: Callable[[], datetime] | None = None,
) -> SchemaDocument:
    """Extract and normalize the environment's schema in a single pass.

    Relationships are taken from every entity in the environment, regardless
    of the solution scope or attribute filters.

    Raises:
      ResolutionError: If the requested solution does not exist.
      MetadataServiceError: If a remote metadata call fails.
      SchemaExtractionError: If an entity has no logical name or a duplicate one.
    """
    request = request or ExtractionRequest()
    resolved_clock = clock or (lambda: datetime.now(UTC))
    extracted_at = resolved_clock()
    environment = metadata_service.describe_environment()

    logger.info("Retrieving entity metadata")
    universe = sort_by_logical_name(metadata_service.retrieve_all_entities())

    solution_name = request.scoped_solution
    solution_components: tuple[str, ...] | None = None
    in_scope: Sequence[Mapping[str, Any]] = universe
    if solution_name is not None:
        logger.info("Filtering by solution: %s", solution_name)
        component_names = resolve_solution_entities(
            metadata_service, solution_name, parallelism=request.parallelism
        )
        solution_components = tuple(sorted(component_names))
        in_scope = [raw for raw in universe if raw.get("LogicalName") in component_names]

    entities = _build_entities(in_scope, request, progress)

    logger.info("Extracting relationships")
    relationships = normalize_relationships(universe)

    return SchemaDocument(
        extracted_at=extracted_at,
        environment_url=environment.environment_url,
        organization_name=environment.organization_name,
        solution_name=solution_name,
        solution_components=solution_components,
        entities=entities,
        relationships=relationships,
    )


def _build_entities(
    raw_entities: Sequence[Mapping[str, Any]],
    request: ExtractionRequest,
    progress: ProgressObserver | None,
) -> tuple[EntityRecord, ...]:
    entities: list[EntityRecord] = []
    seen_logical_names: set[str] = set()
    total = len(raw_entities)
    for processed, raw_entity in enumerate(raw_entities, start=1):
        entity = normalize_entity(
            raw_entity, include_attribute=request.attribute_filter.accepts
        )
        if not entity.logical_name:
            raise SchemaExtractionError(
                f"Entity metadata without a logical name (schema name '{entity.schema_name}')."
            )
        if entity.logical_name in seen_logical_names:
            raise SchemaExtractionError(f"Duplicate entity logical name: {entity.logical_name}")
        seen_logical_names.add(entity.logical_name)
        entities.append(entity)
        logger.debug("[%d/%d] %s", processed, total, entity.logical_name)
        if progress is not None:
            progress(processed, total, entity.logical_name)
    return tuple(entities)
