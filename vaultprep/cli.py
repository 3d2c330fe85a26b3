"""
VAULTPREP Command Line Interface

Commands:
- export: compile an annotation snapshot into CSV files
- introspect: seed an annotation snapshot from a database schema
"""

from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .core.config import Config
from .core.errors import VaultPrepError


@click.group()
@click.version_option(__version__, prog_name="vaultprep")
def main() -> None:
    """VaultPrep - Data Vault 2.1 metadata compiler."""


@main.command("export")
@click.argument("metadata_file", type=click.Path(dir_okay=False))
@click.option(
    "-o",
    "--output",
    "output_dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory [default: export.output_dir from config]",
)
@click.option("--denormalized", is_flag=True, help="Write the single denormalized file instead")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default="config.json",
    help="Path to config.json [default: ./config.json]",
)
def export_cmd(metadata_file: str, output_dir: Optional[str], denormalized: bool, config_file: str) -> None:
    """Compile METADATA_FILE into Data Vault CSV files.

    Examples:

        vaultprep export metadata.json -o out/

        vaultprep export metadata.json --denormalized
    """
    from .export.exporter import VaultExporter
    from .export.metadata_store import MetadataStore

    config = Config(config_file)
    try:
        tables = MetadataStore(metadata_file, config=config).load()
        exporter = VaultExporter(config)
        paths = exporter.write(tables, output_dir, denormalized=denormalized)
    except VaultPrepError as e:
        click.echo(f"Error: {e.message}", err=True)
        if e.details:
            click.echo(e.details, err=True)
        raise SystemExit(1)
    except (ValueError, OSError) as e:
        click.echo(f"Error: could not write export: {e}", err=True)
        raise SystemExit(1)

    for path in paths:
        click.echo(f"Wrote {path}")
    for omission in exporter.omissions:
        where = f"{omission.table}.{omission.group}" if omission.group else omission.table
        click.echo(f"Omitted from {omission.relation}: {where} ({omission.reason})", err=True)


@main.command("introspect")
@click.argument("connection_url")
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    default="metadata.json",
    help="Snapshot file to write [default: ./metadata.json]",
)
@click.option("-s", "--schema", "schemas", multiple=True, help="Schema to read (repeatable)")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default="config.json",
    help="Path to config.json [default: ./config.json]",
)
def introspect_cmd(connection_url: str, output_file: str, schemas: Tuple[str, ...], config_file: str) -> None:
    """Seed an annotation snapshot from the database at CONNECTION_URL."""
    from sqlalchemy.exc import SQLAlchemyError

    from .discover.schema_introspector import SchemaIntrospector
    from .export.metadata_store import MetadataStore

    config = Config(config_file)
    introspector = SchemaIntrospector(connection_url, config=config)
    try:
        tables = introspector.get_table_metadata(schemas or None)
    except SQLAlchemyError as e:
        click.echo(f"Error: could not read database schema: {e}", err=True)
        raise SystemExit(1)
    finally:
        introspector.dispose()

    path = MetadataStore(Path(output_file), config=config).save(tables)
    click.echo(f"Wrote {len(tables)} tables to {path}")


if __name__ == "__main__":
    main()
