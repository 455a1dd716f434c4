"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from dataverse_schema_extractor.configuration import (
    DEFAULT_CONFIG_FILENAME,
    Configuration,
    ConfigurationError,
    OutputFormat,
    load_configuration,
    write_placeholder_configuration,
)
from dataverse_schema_extractor.metadata_service import (
    DataverseWebApiClient,
    MetadataService,
    MetadataServiceError,
    build_credential,
)
from dataverse_schema_extractor.schema_export import (
    SchemaDocumentError,
    export_schema,
    infer_output_format,
    read_schema_document,
)
from dataverse_schema_extractor.schema_extraction import (
    ProgressObserver,
    SchemaExtractionError,
    run_extraction,
)
from dataverse_schema_extractor.solution_resolution import ResolutionError

_FORMAT_CHOICE = click.Choice([item.value for item in OutputFormat], case_sensitive=False)
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class CliError(Exception):
    """Custom CLI error."""


def create_metadata_service(configuration: Configuration) -> MetadataService:
    """Connect to the configured environment."""
    return DataverseWebApiClient(configuration.environment, build_credential(configuration.auth))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="dataverse-schema-extractor")
def cli() -> None:
    """Extract metadata schema from Dataverse / Power Apps environments."""


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration template to write",
)
def generate_config(output_path: str) -> None:
    """Generate a placeholder YAML configuration with guidance comments."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


# pylint: disable=too-many-arguments,too-many-locals
@cli.command(name="extract")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON extraction configuration file",
)
@click.option("--url", "-u", "url", help="Environment URL (e.g., https://org.crm.dynamics.com)")
@click.option(
    "--solution",
    "-s",
    "solution",
    help="Solution unique name to filter by (extracts all metadata if omitted)",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(path_type=str),
    help="Output file path (default: dataverse-schema[-<solution>].<format>)",
)
@click.option(
    "--format",
    "output_format",
    type=_FORMAT_CHOICE,
    help="Output format; inferred from the output file extension when omitted",
)
@click.option(
    "--attribute-prefix",
    "attribute_prefix",
    help="Only include attributes whose logical name starts with this prefix",
)
@click.option(
    "--exclude-attribute",
    "exclude_attributes",
    multiple=True,
    help="Attribute logical name to exclude (repeatable)",
)
@click.option("--tenant-id", "tenant_id", help="Azure AD tenant id")
@click.option("--client-id", "client_id", help="Azure AD application (client) id")
@click.option(
    "--client-secret",
    "client_secret",
    envvar="DATAVERSE_CLIENT_SECRET",
    help="Azure AD client secret (or DATAVERSE_CLIENT_SECRET)",
)
@click.option(
    "--interactive",
    is_flag=True,
    default=False,
    help="Sign in interactively through the browser.",
)
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
def extract(
    config_path: str | None,
    url: str | None,
    solution: str | None,
    output_path: str | None,
    output_format: str | None,
    attribute_prefix: str | None,
    exclude_attributes: tuple[str, ...],
    tenant_id: str | None,
    client_id: str | None,
    client_secret: str | None,
    interactive: bool,
    verbose: bool,
) -> None:
    """Extract the schema of an environment."""
    _configure_logging(verbose)
    try:
        configuration = load_configuration(
            config_path,
            overrides={
                "environment": {"url": url},
                "auth": {
                    "tenant_id": tenant_id,
                    "client_id": client_id,
                    "client_secret": client_secret,
                    "interactive": True if interactive else None,
                },
                "extraction": {
                    "solution": solution,
                    "attribute_prefix": attribute_prefix,
                    "exclude_attributes": list(exclude_attributes) or None,
                },
                "output": {
                    "path": str(Path(output_path).resolve()) if output_path else None,
                    "format": output_format.lower() if output_format else None,
                },
            },
        )
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc

    click.echo(f"Connecting to {configuration.environment.url}...", err=True)
    try:
        metadata_service = create_metadata_service(configuration)
        click.echo("Extracting schema...", err=True)
        outcome = run_extraction(
            configuration, metadata_service, progress=_progress_reporter(verbose)
        )
    except (
        MetadataServiceError,
        ResolutionError,
        SchemaExtractionError,
        OSError,
    ) as exc:
        raise CliError(str(exc)) from exc

    document = outcome.document
    click.echo(str(outcome.output_path))
    click.echo("Statistics:", err=True)
    click.echo(f"  Entities: {len(document.entities)}", err=True)
    click.echo(f"  Attributes: {document.attribute_count}", err=True)
    click.echo(f"  Relationships: {len(document.relationships)}", err=True)
    if document.solution_components is not None:
        click.echo(f"  Solution Components: {len(document.solution_components)}", err=True)


# pylint: enable=too-many-arguments,too-many-locals


@cli.command(name="export")
@click.option(
    "--input",
    "input_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to a JSON schema document produced by extract",
)
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the rendered file to write",
)
@click.option(
    "--format",
    "output_format",
    type=_FORMAT_CHOICE,
    help="Output format; inferred from the output file extension when omitted",
)
def export(input_path: str, output_path: str, output_format: str | None) -> None:
    """Render an extracted JSON schema document as a workbook, CSV or JSON file."""
    resolved_format = (
        OutputFormat(output_format.lower()) if output_format else infer_output_format(output_path)
    )
    if resolved_format is None:
        raise CliError(f"Cannot infer output format from '{output_path}'; pass --format.")
    try:
        document = read_schema_document(input_path)
        written_path = export_schema(document, output_path, resolved_format)
    except (SchemaDocumentError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(written_path))


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        stream=sys.stderr,
    )


def _progress_reporter(verbose: bool) -> ProgressObserver:
    def _report(processed: int, total: int, logical_name: str) -> None:
        if verbose:
            click.echo(f"  [{processed}/{total}] {logical_name}", err=True)
            return
        if processed % 10 == 0 or processed == total:
            click.echo(
                f"\rProcessing entities: {processed}/{total}",
                nl=processed == total,
                err=True,
            )

    return _report


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
