"""Command-line interface for Mimsy.

This module provides the commands that snapshot collection declarations to
disk: ``export-schema``, ``update``, ``apply``, ``init`` and ``info``.
"""

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import NoReturn

import click

from mimsy import __version__
from mimsy.core.config import Settings, get_settings
from mimsy.core.exceptions import MimsyError
from mimsy.core.logging import LoggingContext, configure_logging, get_logger
from mimsy.domain.services.registry import clear_registry
from mimsy.domain.services.serializer import export_schema
from mimsy.infrastructure.project import load_collections, locate_project

logger = get_logger(__name__)

STARTER_COLLECTIONS = '''"""Collection declarations for this Mimsy project."""

from mimsy import builtins, collection, fields

Tags = collection("tags", {
    "name": fields.short_string(
        description="The name of the tag",
        constraints={"minLength": 2, "maxLength": 50},
    ),
    "color": fields.short_string(
        description="The color of the tag, in hexadecimal format",
        constraints={"minLength": 6, "maxLength": 6},
    ),
})

Posts = collection("posts", {
    "title": fields.short_string(
        description="The title of the post",
        constraints={"minLength": 5, "maxLength": 100},
    ),
    "author": fields.relation(
        description="The author of the post",
        relates_to=builtins.User,
        constraints={"required": True},
    ),
    "tags": fields.multi_relation(
        description="The tags associated with the post",
        relates_to=Tags,
        constraints={"required": True},
    ),
    "cover_image": fields.media(
        description="The cover image of the post",
        constraints={"required": True},
    ),
})
'''


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    raise SystemExit(1)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _iso(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize_for_filename(text: str) -> str:
    """Turn a free-form description into a short filename slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:20]


def render_document(document: dict, header: list[str] | None = None) -> str:
    """Render a schema document as indented JSON behind ``//`` header lines."""
    body = json.dumps(document, indent=2)
    if not header:
        return body
    return "\n".join(f"// {line}" for line in header) + "\n" + body


def _load_project_collections(settings: Settings, clear: bool) -> Path:
    """Locate the project, load its collections file and return the project root."""
    if clear:
        clear_registry()

    root = locate_project()
    collections_path = root / settings.collections_file
    if not collections_path.is_file():
        _fail(
            f"No collections file found at {collections_path}. "
            "Please ensure you have a collections file before exporting schema changes."
        )

    click.echo(f"Importing collections from: {collections_path}")
    load_collections(collections_path)
    return root


@click.group()
@click.version_option(version=__version__, prog_name="Mimsy")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    default=None,
    help="Set log level (overrides MIMSY_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """Mimsy - snapshot content collection schemas."""
    settings = get_settings()
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level})
    configure_logging(settings)


@cli.command("export-schema")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False),
    default="schema.json",
    show_default=True,
    help="Output file path",
)
@click.option(
    "-i",
    "--import",
    "import_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Import collections from a Python file before exporting",
)
@click.option("--pretty", is_flag=True, default=False, help="Pretty print the JSON output")
@click.option(
    "--clear",
    is_flag=True,
    default=False,
    help="Clear the registry before importing (useful for testing)",
)
def export_schema_command(output: str, import_path: str | None, pretty: bool, clear: bool) -> None:
    """Export collection schemas to a JSON file."""
    with LoggingContext(command="export-schema"):
        try:
            if clear:
                clear_registry()

            if import_path:
                click.echo(f"Importing collections from: {Path(import_path).resolve()}")
                load_collections(import_path)
                click.echo("Collections imported successfully")

            document = export_schema()
            output_path = Path(output).resolve()
            content = json.dumps(document, indent=2) if pretty else json.dumps(document)
            output_path.write_text(content, encoding="utf-8")
        except (MimsyError, OSError) as e:
            logger.error("Schema export failed", error=str(e))
            _fail(f"Failed to export schema: {e}")

    click.echo(f"Schema exported successfully to: {output_path}")
    click.echo(f"Collections exported: {len(document['collections'])}")
    click.echo(f"Generated at: {document['generatedAt']}")


@cli.command()
@click.option(
    "--clear/--no-clear",
    default=True,
    show_default=True,
    help="Clear the registry before importing collections",
)
def update(clear: bool) -> None:
    """Update the mimsy.schema.json file at the project root."""
    settings = get_settings()

    with LoggingContext(command="update"):
        try:
            root = _load_project_collections(settings, clear)
            document = export_schema()
            output_path = root / settings.schema_file
            header = [
                f"Updated at: {_iso(_now())}",
                f"Version: mimsy@{settings.app_version}",
            ]
            output_path.write_text(render_document(document, header), encoding="utf-8")
        except (MimsyError, OSError) as e:
            logger.error("Schema update failed", error=str(e))
            _fail(f"Failed to update schema: {e}")

    click.echo("Schema updated successfully")
    click.echo(f"Updated: {output_path}")
    click.echo(f"Collections exported: {len(document['collections'])}")


@cli.command()
@click.option(
    "-d",
    "--description",
    prompt="Please describe the changes being applied",
    help="Description of the changes (will prompt if not provided)",
)
@click.option(
    "--clear/--no-clear",
    default=True,
    show_default=True,
    help="Clear the registry before importing collections",
)
def apply(description: str, clear: bool) -> None:
    """Apply and save schema changes with a description."""
    settings = get_settings()

    if not description.strip():
        _fail("Description is required")

    with LoggingContext(command="apply"):
        try:
            root = _load_project_collections(settings, clear)
            document = export_schema()

            applied_at = _now()
            snapshots_dir = root / settings.snapshots_dir
            snapshots_dir.mkdir(parents=True, exist_ok=True)
            filename = f"{applied_at:%y%m%d}-{sanitize_for_filename(description)}.jsonc"
            output_path = snapshots_dir / filename

            header = [
                f"Description: {description}",
                f"Applied at: {_iso(applied_at)}",
                f"Version: mimsy@{settings.app_version}",
            ]
            output_path.write_text(render_document(document, header), encoding="utf-8")
        except (MimsyError, OSError) as e:
            logger.error("Schema apply failed", error=str(e))
            _fail(f"Failed to apply schema: {e}")

    click.echo("Schema applied successfully")
    click.echo(f"Saved to: {output_path}")
    click.echo(f"Collections exported: {len(document['collections'])}")
    click.echo(f"Description: {description}")


@cli.command()
@click.option(
    "--schema-path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where to write mimsy.schema.json (prompts if not provided)",
)
@click.option(
    "--collections-path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where to write the collections module (prompts if not provided)",
)
@click.option("--yes", is_flag=True, help="Skip confirmation prompt")
def init(schema_path: str | None, collections_path: str | None, yes: bool) -> None:
    """Initialize a Mimsy project in the current directory."""
    settings = get_settings()
    base_path = Path.cwd()
    config_path = base_path / settings.config_file

    if schema_path is None:
        schema_path = click.prompt(
            "Where should the schema file be placed?",
            default=str(base_path / settings.schema_file),
        )
    if collections_path is None:
        collections_path = click.prompt(
            "Where should the collections module be placed?",
            default=str(base_path / settings.collections_file),
        )

    if not schema_path.endswith(".json"):
        _fail("Schema file must have a .json extension")
    if not collections_path.endswith(".py"):
        _fail("Collections module must have a .py extension")

    json_path = Path(schema_path).resolve()
    module_path = Path(collections_path).resolve()

    if not yes and not click.confirm(
        f"Confirm creation of:\n  {config_path}\n  {json_path}\n  {module_path}\nContinue?",
        default=True,
    ):
        click.echo("Initialization cancelled.")
        return

    with LoggingContext(command="init"):
        try:
            json_path.parent.mkdir(parents=True, exist_ok=True)
            module_path.parent.mkdir(parents=True, exist_ok=True)

            config_path.write_text(json.dumps({"basePath": "."}, indent=2), encoding="utf-8")
            click.echo(f"Created: {config_path}")

            module_path.write_text(STARTER_COLLECTIONS, encoding="utf-8")
            click.echo(f"Created: {module_path}")

            clear_registry()
            load_collections(module_path)
            json_path.write_text(render_document(export_schema()), encoding="utf-8")
            click.echo(f"Created: {json_path}")
        except (MimsyError, OSError) as e:
            logger.error("Project initialization failed", error=str(e))
            _fail(f"Failed to initialize project: {e}")

    click.echo("\nMimsy project initialized successfully!")
    click.echo("Next steps:")
    click.echo("1. Define your collections in the collections module")
    click.echo("2. Run 'mimsy update' to refresh the schema file")


@cli.command()
def info() -> None:
    """Display Mimsy configuration."""
    settings = get_settings()

    click.echo(f"""
Mimsy v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}

Content API:
  URL:          {settings.api_url}
  Timeout:      {settings.http_timeout}s

Project:
  Schema:       {settings.schema_file}
  Config:       {settings.config_file}
  Collections:  {settings.collections_file}
  Snapshots:    {settings.snapshots_dir}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `mimsy` command is run
    or when using `python -m mimsy`.
    """
    cli()


if __name__ == "__main__":
    main()
