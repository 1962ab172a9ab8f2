"""CLI commands for modelseed."""

import json
import logging
import sys
from pathlib import Path

import click
import psycopg

from modelseed.backends import DirectBackend, StagingBackend
from modelseed.builder import PayloadBuilder
from modelseed.config import load_config
from modelseed.exceptions import DescriptorError, SchemaLoadError
from modelseed.lifecycle import Host
from modelseed.randomness import RandomSource
from modelseed.schema import Schema
from modelseed.seeder import START_SIGNAL, Seeder


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_schema(path: Path) -> Schema:
    try:
        return Schema.from_file(path)
    except (SchemaLoadError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="modelseed")
def cli() -> None:
    """modelseed - seed development databases with fake records."""
    pass


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--iterations", "-n", type=click.IntRange(min=1), help="Records per model")
@click.option("--database-url", help="PostgreSQL URL (overrides config)")
@click.option("--db-schema", help="Database schema holding the tables (overrides config)")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to modelseed.toml (default: search upwards from cwd)",
)
@click.option("--dry-run", is_flag=True, help="Seed an in-memory store instead of the database")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def seed(
    schema_file: Path,
    iterations: int | None,
    database_url: str | None,
    db_schema: str | None,
    config_path: Path | None,
    dry_run: bool,
    verbose: bool,
) -> None:
    """Seed every model in SCHEMA_FILE, then wire up their relations."""
    _configure_logging(verbose)
    schema = _load_schema(schema_file)
    config = load_config(config_path)

    seeder = Seeder(config.seed)
    if iterations is not None:
        seeder.set_iterations(iterations)

    host = Host()
    seeder.register(host)

    if not seeder.should_seed():
        click.secho(
            f'Environment is not "{config.seed.required_environment}", '
            f"not seeding the database",
            fg="red",
            err=True,
        )
        return

    click.secho("- Seeding the database with fake data.", fg="blue")

    if dry_run:
        result = host.emit(START_SIGNAL, schema, StagingBackend())
    else:
        url = database_url or config.database.url
        try:
            with psycopg.connect(url) as conn:
                backend = DirectBackend(
                    conn,
                    schema=db_schema or config.database.schema_name,
                    batch_size=config.database.batch_size,
                )
                result = host.emit(START_SIGNAL, schema, backend)
        except psycopg.OperationalError as e:
            click.echo(f"Error: could not connect to {url}: {e}", err=True)
            sys.exit(1)

    if result is None:
        click.secho("- SEED - Finished seeding the database with an error", fg="red", err=True)
        return

    for model_name, count in result.counts().items():
        click.echo(f"  {model_name}: {count} records")

    failed = len(result.failed_associations)
    if failed:
        click.secho(f"- SEED - {failed} associations could not be set", fg="yellow")
    click.secho("- SEED - Finished seeding the database", fg="green")


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--model", "model_names", multiple=True, help="Model to preview (repeatable)")
@click.option("--count", "-n", type=click.IntRange(min=1), default=1, help="Payloads per model")
@click.option("--seed", "random_seed", type=int, help="Seed for reproducible output")
def preview(
    schema_file: Path,
    model_names: tuple[str, ...],
    count: int,
    random_seed: int | None,
) -> None:
    """Print generated payloads for SCHEMA_FILE as JSON without persisting."""
    schema = _load_schema(schema_file)

    names = list(model_names) or [model.name for model in schema.seedable()]
    for name in names:
        if name not in schema:
            click.echo(f"Error: model '{name}' is not in {schema_file}", err=True)
            sys.exit(1)
        if schema[name].junction_table:
            click.echo(f"Error: model '{name}' is a junction table and is never seeded", err=True)
            sys.exit(1)

    builder = PayloadBuilder(RandomSource(seed=random_seed))
    try:
        output = {name: builder.build_many(schema[name].attributes, count) for name in names}
    except DescriptorError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(output, indent=2, default=str))


if __name__ == "__main__":
    cli()
