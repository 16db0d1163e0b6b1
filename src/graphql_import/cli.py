import logging
import sys
from pathlib import Path

import rich_click as click
import yaml
from graphql import GraphQLError
from pydantic import ValidationError
from rich.traceback import install

from graphql_import import __version__, log
from graphql_import.config import ImportSchemaOptions, load_import_config
from graphql_import.errors import ImportSchemaError
from graphql_import.import_line import parse_sdl
from graphql_import.importer import import_schema
from graphql_import.sources import read_schema

schema_argument = click.argument("schema", type=str)


@click.group(context_settings={"auto_envvar_prefix": "GRAPHQL_IMPORT"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@cli.command()
@schema_argument
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Output file, the bundled schema is printed to stdout when omitted",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file with import options (schemas, mergeableTypes, moduleDirs)",
)
@click.option(
    "--mergeable-type",
    "-m",
    "mergeable_types",
    multiple=True,
    help="Type merged across schemas like Query/Mutation/Subscription. Can be specified multiple times.",
)
def bundle(schema: str, output: Path | None, config: Path | None, mergeable_types: tuple[str, ...]) -> None:
    """Bundle SCHEMA and everything it imports into a single GraphQL schema."""
    try:
        options = load_import_config(config)
        if mergeable_types:
            options = ImportSchemaOptions.model_validate(
                {**options.model_dump(), "mergeable_types": [*options.mergeable_types, *mergeable_types]}
            )
        bundled_schema = import_schema(schema, options)
    except ImportSchemaError as e:
        log.error(f"Import failed: {e}")
        sys.exit(1)
    except GraphQLError as e:
        log.error(f"Invalid schema: {e}")
        sys.exit(1)
    except (ValidationError, TypeError, yaml.YAMLError) as e:
        log.error(f"Invalid config: {e}")
        sys.exit(1)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)

    if output is None:
        click.echo(bundled_schema)
        return

    output.write_text(bundled_schema + "\n")
    log.success(f"Successfully bundled {schema} to {output}")


@cli.command(name="imports")
@schema_argument
def list_imports(schema: str) -> None:
    """List the import lines of SCHEMA."""
    try:
        requests = parse_sdl(read_schema(schema))
    except ImportSchemaError as e:
        log.error(f"Import failed: {e}")
        sys.exit(1)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)

    if not requests:
        log.hint(f"No imports found in {schema}")
        return

    log.rule(f"Imports of {schema}")
    for request in requests:
        log.import_request(request.imports, request.source)


if __name__ == "__main__":
    cli()
