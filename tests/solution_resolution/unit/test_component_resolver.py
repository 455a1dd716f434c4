"""Solution component resolver tests."""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from typing import Any

import pytest
from dataverse_schema_extractor.metadata_service import (
    ENTITY_FACET,
    EnvironmentDescriptor,
    MetadataAccessError,
)
from dataverse_schema_extractor.solution_resolution import (
    ENTITY_COMPONENT_TYPE,
    ResolutionError,
    ResolutionFailure,
    resolve_solution_entities,
)

SOLUTION_ID = "7f1c2a64-2f55-4c5e-9a1b-0d7b1f3e9c11"


class FakeSolutionService:
    def __init__(
        self,
        *,
        solutions: list[Mapping[str, Any]],
        components: list[Mapping[str, Any]],
        entities_by_id: Mapping[str, Mapping[str, Any]],
    ) -> None:
        self.solutions = solutions
        self.components = components
        self.entities_by_id = entities_by_id
        self.queries: list[tuple[str, tuple[str, ...], dict[str, Any]]] = []
        self.requested_facets: list[tuple[str, ...]] = []

    def describe_environment(self) -> EnvironmentDescriptor:
        return EnvironmentDescriptor("https://org.crm.dynamics.com", "Org")

    def retrieve_all_entities(self) -> list[Mapping[str, Any]]:
        return []

    def retrieve_multiple(
        self, entity_set: str, *, columns: Sequence[str], criteria: Mapping[str, Any]
    ) -> list[Mapping[str, Any]]:
        self.queries.append((entity_set, tuple(columns), dict(criteria)))
        if entity_set == "solutions":
            return self.solutions
        if entity_set == "solutioncomponents":
            return self.components
        raise AssertionError(f"unexpected query: {entity_set}")

    def retrieve_entity(
        self, metadata_id: str, *, facets: Sequence[str] = (ENTITY_FACET,)
    ) -> Mapping[str, Any]:
        self.requested_facets.append(tuple(facets))
        if metadata_id not in self.entities_by_id:
            raise MetadataAccessError(f"Entity {metadata_id} could not be retrieved")
        return self.entities_by_id[metadata_id]


def _component(object_id: str) -> dict[str, Any]:
    return {"objectid": object_id, "componenttype": ENTITY_COMPONENT_TYPE}


def test_resolver_returns_logical_names_and_skips_failed_lookups() -> None:
    service = FakeSolutionService(
        solutions=[{"solutionid": SOLUTION_ID}],
        components=[_component("id-1"), _component("id-2"), _component("id-3")],
        entities_by_id={
            "id-1": {"LogicalName": "account"},
            "id-3": {"LogicalName": "new_project"},
        },
    )

    names = resolve_solution_entities(service, "MySolution", parallelism=3)

    assert names == frozenset({"account", "new_project"})
    assert set(service.requested_facets) == {(ENTITY_FACET,)}


def test_resolver_queries_solution_then_entity_components() -> None:
    service = FakeSolutionService(
        solutions=[{"solutionid": SOLUTION_ID}],
        components=[],
        entities_by_id={},
    )

    names = resolve_solution_entities(service, "MySolution")

    assert names == frozenset()
    assert service.queries == [
        ("solutions", ("solutionid",), {"uniquename": "MySolution"}),
        (
            "solutioncomponents",
            ("objectid", "componenttype"),
            {"_solutionid_value": uuid.UUID(SOLUTION_ID), "componenttype": 1},
        ),
    ]


def test_resolver_ignores_components_without_object_id() -> None:
    service = FakeSolutionService(
        solutions=[{"solutionid": SOLUTION_ID}],
        components=[{"objectid": None, "componenttype": 1}, _component("id-1")],
        entities_by_id={"id-1": {"LogicalName": "contact"}},
    )

    assert resolve_solution_entities(service, "MySolution") == frozenset({"contact"})


def test_resolver_raises_not_found_for_unknown_solution() -> None:
    service = FakeSolutionService(solutions=[], components=[], entities_by_id={})

    with pytest.raises(ResolutionError) as exc_info:
        resolve_solution_entities(service, "Missing")

    assert exc_info.value.reason is ResolutionFailure.NOT_FOUND
    assert "Solution 'Missing' not found" in str(exc_info.value)
    assert [query[0] for query in service.queries] == ["solutions"]
