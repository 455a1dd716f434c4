"""Solution component resolution service."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Any

from dataverse_schema_extractor.metadata_service import (
    ENTITY_FACET,
    MetadataAccessError,
    MetadataService,
)

logger = logging.getLogger(__name__)

ENTITY_COMPONENT_TYPE = 1


class ResolutionFailure(str, Enum):
    """Reasons a solution cannot be resolved."""

    NOT_FOUND = "not_found"


class ResolutionError(Exception):
    """Raised when a solution name cannot be resolved to its entities."""

    def __init__(self, message: str, *, reason: ResolutionFailure) -> None:
        super().__init__(message)
        self.reason = reason


def resolve_solution_entities(
    metadata_service: MetadataService,
    solution_name: str,
    *,
    parallelism: int = 1,
) -> frozenset[str]:
    """Return the logical names of the entities packaged in a solution.

    Components whose entity metadata cannot be retrieved are skipped.

    Raises:
      ResolutionError: If no solution has the given unique name.
    """
    solution_id = _find_solution_id(metadata_service, solution_name)
    components = metadata_service.retrieve_multiple(
        "solutioncomponents",
        columns=("objectid", "componenttype"),
        criteria={
            "_solutionid_value": solution_id,
            "componenttype": ENTITY_COMPONENT_TYPE,
        },
    )
    object_ids = [
        str(component["objectid"]) for component in components if component.get("objectid")
    ]
    logger.debug("Solution %s has %d entity components", solution_name, len(object_ids))

    max_workers = max(1, parallelism)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        logical_names = list(
            executor.map(
                lambda object_id: _lookup_logical_name(metadata_service, object_id),
                object_ids,
            )
        )
    return frozenset(name for name in logical_names if name)


def _find_solution_id(metadata_service: MetadataService, solution_name: str) -> uuid.UUID:
    solutions = metadata_service.retrieve_multiple(
        "solutions",
        columns=("solutionid",),
        criteria={"uniquename": solution_name},
    )
    if not solutions:
        raise ResolutionError(
            f"Solution '{solution_name}' not found", reason=ResolutionFailure.NOT_FOUND
        )
    return uuid.UUID(str(solutions[0]["solutionid"]))


def _lookup_logical_name(metadata_service: MetadataService, object_id: str) -> str | None:
    try:
        metadata: Mapping[str, Any] = metadata_service.retrieve_entity(
            object_id, facets=(ENTITY_FACET,)
        )
    except MetadataAccessError as exc:
        logger.debug("Skipping solution component %s: %s", object_id, exc)
        return None
    logical_name = metadata.get("LogicalName")
    return str(logical_name) if logical_name else None
