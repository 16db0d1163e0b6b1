"""Merging of root operation types and other mergeable types across fragments."""

from collections.abc import Iterable, Sequence

from graphql import (
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeSystemDefinitionNode,
    UnionTypeDefinitionNode,
)

from graphql_import import log
from graphql_import.definitions import SCHEMA_NAME, get_node_name, replace_node_attribute

ROOT_FIELDS = ("Query", "Mutation", "Subscription", SCHEMA_NAME)

# Attribute holding the mergeable members of each definition kind
MERGED_ATTRIBUTES: dict[type[TypeSystemDefinitionNode], str] = {
    ObjectTypeDefinitionNode: "fields",
    InterfaceTypeDefinitionNode: "fields",
    InputObjectTypeDefinitionNode: "fields",
    EnumTypeDefinitionNode: "values",
    UnionTypeDefinitionNode: "types",
    SchemaDefinitionNode: "operation_types",
}


def get_mergeable_names(mergeable_types: Iterable[str] = ()) -> frozenset[str]:
    return frozenset((*mergeable_types, *ROOT_FIELDS))


def merge_definitions(existing: TypeSystemDefinitionNode, other: TypeSystemDefinitionNode) -> TypeSystemDefinitionNode:
    """Append the members (fields, operation types, ...) of `other` missing from a copy of `existing`."""
    attribute = MERGED_ATTRIBUTES.get(type(existing))
    if attribute is None or not hasattr(other, attribute):
        log.debug(f"Cannot merge {type(other).__name__} into {type(existing).__name__} {get_node_name(existing)}")
        return existing

    members = list(getattr(existing, attribute) or ())
    # A fragment visited twice yields the same members again
    for member in getattr(other, attribute) or ():
        if member not in members:
            members.append(member)
    return replace_node_attribute(existing, attribute, tuple(members))


def merge_root_definitions(
    type_definitions: Sequence[Sequence[TypeSystemDefinitionNode]], mergeable_types: Iterable[str] = ()
) -> list[TypeSystemDefinitionNode]:
    """Build the initial definition pool from the requested definitions of every fragment.

    Root fields and mergeable types are gathered from all fragments in first-seen order, same-named ones
    merged into a single definition, followed by the remaining definitions of the root fragment.

    Args:
        type_definitions: Requested definitions per visited fragment, the root fragment first
        mergeable_types: Type names merged like root fields

    Returns:
        The merged root definitions followed by the other root fragment definitions
    """
    mergeable = get_mergeable_names(mergeable_types)

    merged: dict[str, TypeSystemDefinitionNode] = {}
    for layer in type_definitions:
        for definition in layer:
            name = get_node_name(definition)
            if name not in mergeable:
                continue
            existing = merged.get(name)
            merged[name] = definition if existing is None else merge_definitions(existing, definition)

    root_layer = type_definitions[0] if type_definitions else ()
    other_first_types = [definition for definition in root_layer if get_node_name(definition) not in mergeable]

    return [*merged.values(), *other_first_types]
