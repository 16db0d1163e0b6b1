"""Helpers over the graphql-core SDL AST used by the traversal and closure algorithms."""

from collections.abc import Iterable, Sequence
from typing import Any

from graphql import (
    DefinitionNode,
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeNode,
    TypeSystemDefinitionNode,
    UnionTypeDefinitionNode,
    parse,
    print_ast,
    specified_directives,
    specified_scalar_types,
)

SCHEMA_NAME = "schema"

DEFINITION_KINDS = (
    SchemaDefinitionNode,
    DirectiveDefinitionNode,
    ScalarTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    EnumTypeDefinitionNode,
    UnionTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
)

BUILTIN_SCALARS = frozenset(specified_scalar_types)
BUILTIN_DIRECTIVES = frozenset(directive.name for directive in specified_directives)


def is_builtin_scalar(type_name: str) -> bool:
    return type_name in BUILTIN_SCALARS


def is_builtin_directive(directive_name: str) -> bool:
    return directive_name in BUILTIN_DIRECTIVES


def get_node_name(node: TypeSystemDefinitionNode) -> str:
    """Name of a definition, `schema` for the schema definition."""
    if isinstance(node, SchemaDefinitionNode):
        return SCHEMA_NAME
    return node.name.value


def get_named_type(type_node: TypeNode) -> NamedTypeNode:
    """Unwrap List and NonNull layers down to the named type."""
    while isinstance(type_node, ListTypeNode | NonNullTypeNode):
        type_node = type_node.type
    return type_node  # type: ignore[return-value]


def is_empty_sdl(sdl: str) -> bool:
    """Check whether a schema contains nothing but whitespace and comments."""
    return all(not line.strip() or line.strip().startswith("#") for line in sdl.split("\n"))


def get_document_from_sdl(sdl: str) -> DocumentNode:
    """Parse a schema into a DocumentNode; an empty schema yields a document without definitions."""
    if is_empty_sdl(sdl):
        return DocumentNode(definitions=())
    return parse(sdl, no_location=True)


def filter_type_definitions(definitions: Iterable[DefinitionNode]) -> list[TypeSystemDefinitionNode]:
    """Keep the definitions relevant for the bundled schema, dropping extensions and executable definitions."""
    return [definition for definition in definitions if isinstance(definition, DEFINITION_KINDS)]


def index_definitions(definitions: Sequence[TypeSystemDefinitionNode]) -> dict[str, TypeSystemDefinitionNode]:
    """Index definitions by name; on collisions the earliest definition wins."""
    return {get_node_name(definition): definition for definition in reversed(definitions)}


def unique_by_name(definitions: Iterable[TypeSystemDefinitionNode]) -> list[TypeSystemDefinitionNode]:
    """Drop definitions whose name was already seen, keeping the first occurrence."""
    seen: set[str] = set()
    unique = []
    for definition in definitions:
        name = get_node_name(definition)
        if name not in seen:
            seen.add(name)
            unique.append(definition)
    return unique


def replace_node_attribute(node: TypeSystemDefinitionNode, attribute: str, value: Any) -> TypeSystemDefinitionNode:
    """Return a new node of the same kind with one attribute replaced, leaving the original untouched.

    Nodes are rebuilt through their constructor, as graphql-core nodes may be immutable.
    """
    return type(node)(**{**{key: getattr(node, key) for key in node.keys}, attribute: value})


def print_definitions(definitions: Sequence[TypeSystemDefinitionNode]) -> str:
    return print_ast(DocumentNode(definitions=tuple(definitions)))
