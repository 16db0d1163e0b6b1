"""Recursive traversal of the `# import` graph.

Every visited fragment contributes one entry to two parallel collections: all of its definitions, and the
subset requested by the import line that led to it. Both keep visitation order and are the only inputs
of the closure step.
"""

from collections import defaultdict
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from graphql import ObjectTypeDefinitionNode, TypeSystemDefinitionNode

from graphql_import import log
from graphql_import.definitions import (
    filter_type_definitions,
    get_document_from_sdl,
    get_node_name,
    replace_node_attribute,
)
from graphql_import.import_line import WILDCARD, ImportRequest, parse_sdl
from graphql_import.merge import ROOT_FIELDS
from graphql_import.sources import DEFAULT_MODULE_DIRS, location_key, read_schema, resolve_module_file_path

Definitions = list[TypeSystemDefinitionNode]


@dataclass
class CollectedDefinitions:
    """Running state of one traversal.

    Attributes:
        all_definitions: Every definition of every visited fragment, one list per visit
        type_definitions: The definitions requested from every visited fragment, one list per visit
        processed_imports: Import lines already followed, keyed by the location they were made from
    """

    all_definitions: list[Definitions] = field(default_factory=list)
    type_definitions: list[Definitions] = field(default_factory=list)
    processed_imports: set[tuple[str, ImportRequest]] = field(default_factory=set)


def collect_definitions(
    imports: Sequence[str],
    sdl: str,
    file_path: str,
    schemas: Mapping[str, str] | None = None,
    module_dirs: Sequence[str] = DEFAULT_MODULE_DIRS,
    collected: CollectedDefinitions | None = None,
) -> CollectedDefinitions:
    """Recursively process a fragment and everything it imports.

    Args:
        imports: Names requested from this fragment, `["*"]` for everything
        sdl: SDL of this fragment
        file_path: Location of this fragment, used to resolve its own imports
        schemas: Named in-memory schemas
        module_dirs: Directory names searched when resolving imports as modules
        collected: State shared across the recursion, created for the root fragment

    Returns:
        The collected definitions of every visited fragment
    """
    if collected is None:
        collected = CollectedDefinitions()

    key = location_key(file_path)
    log.debug(f"Visiting {key} for {', '.join(imports)}")

    definitions = apply_field_imports(imports, filter_type_definitions(get_document_from_sdl(sdl).definitions))
    requested = filter_imported_definitions(imports, definitions, collected.type_definitions)
    collected.all_definitions.append(definitions)
    collected.type_definitions.append(requested)

    for request in parse_sdl(sdl):
        if (key, request) in collected.processed_imports:
            log.debug(f"Skipping already processed import of {request.source} from {key}")
            continue

        # Mark the line before recursing so circular imports terminate
        collected.processed_imports.add((key, request))
        module_file_path = resolve_module_file_path(file_path, request.source, module_dirs)
        collect_definitions(
            request.imports,
            read_schema(module_file_path, schemas),
            module_file_path,
            schemas,
            module_dirs,
            collected,
        )

    return collected


def apply_field_imports(imports: Sequence[str], definitions: Definitions) -> Definitions:
    """Narrow the fields of types imported with `Type.field` entries.

    All dotted entries of one import line are grouped by type; the type keeps the union of the named
    fields, or all of them when `Type.*` is among the entries. Narrowed types are new nodes replacing the
    parsed ones, so other fragments importing the same type are not affected.
    """
    field_imports: defaultdict[str, set[str]] = defaultdict(set)
    for name in imports:
        type_name, dot, field_name = name.partition(".")
        if dot:
            field_imports[type_name].add(field_name)

    if not field_imports:
        return definitions

    narrowed = []
    for definition in definitions:
        fields = field_imports.get(get_node_name(definition))
        if fields is None or WILDCARD in fields or not hasattr(definition, "fields"):
            narrowed.append(definition)
            continue
        kept = tuple(field_node for field_node in definition.fields if field_node.name.value in fields)
        narrowed.append(replace_node_attribute(definition, "fields", kept))

    missing = set(field_imports) - {get_node_name(definition) for definition in definitions}
    if missing:
        log.debug(f"Field imports of {', '.join(sorted(missing))} match no definition")

    return narrowed


def filter_imported_definitions(
    imports: Sequence[str], definitions: Definitions, previous_type_definitions: Sequence[Definitions] = ()
) -> Definitions:
    """Select the definitions of a fragment requested by an import line.

    Args:
        imports: Names from the import line
        definitions: Definitions of the fragment
        previous_type_definitions: Requested definitions of the fragments visited before this one

    Returns:
        Everything for a wildcard import of the root fragment. A wildcard import of any other fragment only
        selects object types whose name was already requested from an earlier fragment (root fields excluded).
        Otherwise the definitions named by the import line, dotted entries selecting their type.
    """
    if WILDCARD in imports:
        if list(imports) == [WILDCARD] and previous_type_definitions:
            previous_names = {
                get_node_name(definition)
                for layer in previous_type_definitions
                for definition in layer
                if get_node_name(definition) not in ROOT_FIELDS
            }
            return [
                definition
                for definition in definitions
                if isinstance(definition, ObjectTypeDefinitionNode) and definition.name.value in previous_names
            ]
        return list(definitions)

    imported_names = {name.split(".")[0] for name in imports}
    return [definition for definition in definitions if get_node_name(definition) in imported_names]
