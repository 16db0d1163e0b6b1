"""Entry point bundling a schema and everything it imports into a single SDL document."""

from itertools import chain

from graphql import TypeSystemDefinitionNode

from graphql_import import log
from graphql_import.closure import complete_definition_pool
from graphql_import.config import ImportSchemaOptions
from graphql_import.definitions import get_node_name, print_definitions
from graphql_import.import_line import WILDCARD
from graphql_import.merge import get_mergeable_names, merge_root_definitions
from graphql_import.sources import read_schema
from graphql_import.traversal import collect_definitions


def import_schema(schema: str, options: ImportSchemaOptions | None = None) -> str:
    """Recursively process all import statements of a schema and bundle the result.

    Query, Mutation, Subscription, the schema definition and the configured mergeable types are merged
    across fragments and always kept; every other definition is only kept when it is requested by the
    root schema or referenced, directly or not, by a kept definition.

    Args:
        schema: Path or glob of the root schema, name of an in-memory schema, or inline SDL
        options: Named in-memory schemas, mergeable types and module directories

    Returns:
        Single bundled schema with all imported types

    Raises:
        MalformedImportLineError: If an import line cannot be parsed
        MissingTypeError: If a referenced type is not defined in any fragment
        MissingInterfaceError: If an implemented interface is not defined in any fragment
        MissingDirectiveError: If an applied directive is not defined in any fragment
        SchemaModuleNotFoundError: If an import target cannot be resolved
    """
    if options is None:
        options = ImportSchemaOptions()

    sdl = read_schema(schema, options.schemas)

    # Start by importing all types from the initial schema
    collected = collect_definitions([WILDCARD], sdl, schema, options.schemas, options.module_dirs)
    log.debug(f"Visited {len(collected.all_definitions)} schema fragment(s)")

    definition_pool = merge_root_definitions(collected.type_definitions, options.mergeable_types)
    new_type_definitions = _with_merged_definitions(
        list(chain.from_iterable(collected.type_definitions)), definition_pool, options.mergeable_types
    )

    definitions = complete_definition_pool(
        list(chain.from_iterable(collected.all_definitions)), definition_pool, new_type_definitions
    )
    log.debug(f"Bundled schema contains {len(definitions)} definition(s)")

    return print_definitions(definitions)


def _with_merged_definitions(
    definitions: list[TypeSystemDefinitionNode],
    definition_pool: list[TypeSystemDefinitionNode],
    mergeable_types: list[str],
) -> list[TypeSystemDefinitionNode]:
    """Substitute the merged pool definition for every mergeable definition waiting to be processed."""
    mergeable = get_mergeable_names(mergeable_types)
    merged = {
        get_node_name(definition): definition
        for definition in definition_pool
        if get_node_name(definition) in mergeable
    }
    return [merged.get(get_node_name(definition), definition) for definition in definitions]
