"""Remote metadata service contract."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

ENTITY_FACET = "Entity"
ATTRIBUTES_FACET = "Attributes"
RELATIONSHIPS_FACET = "Relationships"


class MetadataServiceError(Exception):
    """Raised when a remote metadata call fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MetadataAccessError(MetadataServiceError):
    """Raised when metadata for a single entity cannot be retrieved."""


@dataclass(frozen=True)
class EnvironmentDescriptor:
    """Identity of the connected environment."""

    environment_url: str
    organization_name: str


class MetadataService(Protocol):
    """Capabilities the extraction pipeline needs from the remote platform."""

    def describe_environment(self) -> EnvironmentDescriptor: ...

    def retrieve_all_entities(self) -> list[Mapping[str, Any]]: ...

    def retrieve_multiple(
        self,
        entity_set: str,
        *,
        columns: Sequence[str],
        criteria: Mapping[str, Any],
    ) -> list[Mapping[str, Any]]: ...

    def retrieve_entity(
        self, metadata_id: str, *, facets: Sequence[str] = (ENTITY_FACET,)
    ) -> Mapping[str, Any]: ...
