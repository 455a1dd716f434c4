"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "extractor.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Extraction configuration template for dataverse-schema-extractor.
# Replace every <REQUIRED> placeholder before running extract.
# Uncomment <OPTIONAL> entries only when your setup needs them.
# Command line options override the values in this file.

environment:
  # Environment URL, e.g. https://org.crm.dynamics.com
  url: "<REQUIRED>"
  api_version: "9.2"
  timeout_seconds: 120

auth:
  # Set tenant_id, client_id and client_secret for app-only access.
  # Set interactive: true to sign in through the browser.
  # Otherwise the default Azure credential chain is used.
  # tenant_id: "<OPTIONAL>"
  # client_id: "<OPTIONAL>"
  # client_secret: "<OPTIONAL>"
  interactive: false

extraction:
  # Solution unique name; leave unset to extract all metadata.
  # solution: "<OPTIONAL>"
  # Keep only attributes whose logical name starts with this prefix (case-insensitive).
  # attribute_prefix: "<OPTIONAL>"
  # exclude_attributes:
  #   - "<OPTIONAL>"
  # Concurrent solution component lookups.
  parallelism: 4

output:
  # path: "<OPTIONAL>"
  # One of json, xlsx, csv. Inferred from the path extension when omitted.
  format: json
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration template with placeholders and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the placeholder configuration template to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
