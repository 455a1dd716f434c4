"""Solution resolution exports."""

from .component_resolver import (
    ENTITY_COMPONENT_TYPE,
    ResolutionError,
    ResolutionFailure,
    resolve_solution_entities,
)

__all__ = [
    "ENTITY_COMPONENT_TYPE",
    "ResolutionError",
    "ResolutionFailure",
    "resolve_solution_entities",
]
