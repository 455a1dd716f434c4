"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import (
    AuthSettings,
    Configuration,
    EnvironmentSettings,
    ExtractionSettings,
    OutputFormat,
    OutputSettings,
)

ConfigurationOverrides = Mapping[str, Mapping[str, Any]]


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def load_configuration(
    config_path: Path | str | None = None,
    overrides: ConfigurationOverrides | None = None,
) -> Configuration:
    """Load and validate the configuration.

    Args:
      config_path: Optional YAML/JSON configuration file.
      overrides: Per-section values that replace file values; None values are ignored.

    Returns:
      The validated configuration.

    Raises:
      ConfigurationError: If the file is missing or a value is invalid.
    """
    path = Path(config_path) if config_path is not None else None
    parsed = _read_configuration_file(path) if path is not None else {}
    merged = _apply_overrides(parsed, overrides or {})
    base_path = path.parent if path is not None else Path.cwd()

    return Configuration(
        path=path,
        environment=_parse_environment_section(merged.get("environment")),
        auth=_parse_auth_section(merged.get("auth")),
        extraction=_parse_extraction_section(merged.get("extraction")),
        output=_parse_output_section(merged.get("output"), base_path),
    )


def _read_configuration_file(path: Path) -> Mapping[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")
    return parsed


def _apply_overrides(
    parsed: Mapping[str, Any], overrides: ConfigurationOverrides
) -> dict[str, Any]:
    merged: dict[str, Any] = dict(parsed)
    for section_name, values in overrides.items():
        section = merged.get(section_name)
        if section is None:
            section = {}
        if not isinstance(section, Mapping):
            raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
        updated = dict(section)
        updated.update({key: value for key, value in values.items() if value is not None})
        merged[section_name] = updated
    return merged


def _parse_environment_section(value: Any) -> EnvironmentSettings:
    section = _optional_mapping(value, "environment")
    url = section.get("url")
    if url is None:
        raise ConfigurationError("environment.url is required.")
    url = _require_non_empty_string(url, "environment.url")
    if not url.lower().startswith(("https://", "http://")):
        raise ConfigurationError("environment.url must be an http(s) URL.")
    api_version = _require_non_empty_string(
        str(section.get("api_version", "9.2")), "environment.api_version"
    )
    timeout_seconds = _require_positive_int(
        section.get("timeout_seconds", 120), "environment.timeout_seconds"
    )
    return EnvironmentSettings(
        url=url.rstrip("/"),
        api_version=api_version,
        timeout_seconds=timeout_seconds,
    )


def _parse_auth_section(value: Any) -> AuthSettings:
    section = _optional_mapping(value, "auth")
    return AuthSettings(
        tenant_id=_optional_string(section.get("tenant_id"), "auth.tenant_id"),
        client_id=_optional_string(section.get("client_id"), "auth.client_id"),
        client_secret=_optional_string(section.get("client_secret"), "auth.client_secret"),
        interactive=bool(section.get("interactive", False)),
    )


def _parse_extraction_section(value: Any) -> ExtractionSettings:
    section = _optional_mapping(value, "extraction")
    return ExtractionSettings(
        solution=_optional_string(section.get("solution"), "extraction.solution"),
        attribute_prefix=_optional_string(
            section.get("attribute_prefix"), "extraction.attribute_prefix"
        ),
        exclude_attributes=frozenset(
            _normalize_string_sequence(
                section.get("exclude_attributes"), "extraction.exclude_attributes"
            )
        ),
        parallelism=_require_positive_int(
            section.get("parallelism", 4), "extraction.parallelism"
        ),
    )


def _parse_output_section(value: Any, base_path: Path) -> OutputSettings:
    section = _optional_mapping(value, "output")
    raw_path = _optional_string(section.get("path"), "output.path")
    raw_format = _optional_string(section.get("format"), "output.format")
    output_format = None
    if raw_format is not None:
        try:
            output_format = OutputFormat(raw_format.lower())
        except ValueError as exc:
            supported = ", ".join(item.value for item in OutputFormat)
            raise ConfigurationError(f"output.format must be one of: {supported}.") from exc
    return OutputSettings(
        path=_resolve_path(base_path, raw_path) if raw_path else None,
        format=output_format,
    )


def _normalize_string_sequence(value: Any, field_name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(item.strip() for item in value.split(",") if item.strip())
    if isinstance(value, Sequence):
        normalized = []
        for item in value:
            if not isinstance(item, str):
                raise ConfigurationError(f"{field_name} entries must be strings.")
            stripped = item.strip()
            if stripped:
                normalized.append(stripped)
        return tuple(normalized)
    raise ConfigurationError(f"{field_name} must be a string or list of strings.")


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
