"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class OutputFormat(str, Enum):
    """Supported schema document renderings."""

    JSON = "json"
    XLSX = "xlsx"
    CSV = "csv"

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(frozen=True)
class EnvironmentSettings:
    """Dataverse environment connectivity configuration."""

    url: str
    api_version: str = "9.2"
    timeout_seconds: int = 120


@dataclass(frozen=True)
class AuthSettings:
    """Azure AD credential configuration."""

    tenant_id: str | None = None
    client_id: str | None = None
    client_secret: str | None = field(default=None, repr=False)
    interactive: bool = False


@dataclass(frozen=True)
class ExtractionSettings:
    """Scope of one extraction run."""

    solution: str | None = None
    attribute_prefix: str | None = None
    exclude_attributes: frozenset[str] = frozenset()
    parallelism: int = 4


@dataclass(frozen=True)
class OutputSettings:
    """Destination of the rendered schema document."""

    path: Path | None = None
    format: OutputFormat | None = None


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    environment: EnvironmentSettings
    auth: AuthSettings
    extraction: ExtractionSettings
    output: OutputSettings
