"""Extraction run entities."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

ProgressObserver = Callable[[int, int, str], None]
"""Called with (processed, total, entity logical name) after each entity."""


@dataclass(frozen=True)
class AttributeFilter:
    """Attribute inclusion rules applied per entity."""

    prefix: str | None = None
    excluded: frozenset[str] = frozenset()

    def accepts(self, logical_name: str) -> bool:
        """Return True when the attribute passes both the prefix and exclusion rules."""
        prefix = self.prefix.strip() if self.prefix else ""
        if prefix and not logical_name.lower().startswith(prefix.lower()):
            return False
        return logical_name not in self.excluded


@dataclass(frozen=True)
class ExtractionRequest:
    """Input contract for one extraction run."""

    solution_name: str | None = None
    attribute_filter: AttributeFilter = AttributeFilter()
    parallelism: int = 1

    @property
    def scoped_solution(self) -> str | None:
        """Solution name when it is non-blank."""
        if self.solution_name is None or not self.solution_name.strip():
            return None
        return self.solution_name.strip()
