"""Completion of the definition pool.

Starting from the requested definitions, every definition referenced by field and argument types,
directives, implemented interfaces, union members and schema operation types is pulled in from the
definitions of all traversed fragments, until nothing new is discovered. A work queue and a set of
visited names drive the process, so cycles between types need no recursion.
"""

from collections import deque
from collections.abc import Sequence

from graphql import (
    DirectiveDefinitionNode,
    DirectiveNode,
    EnumTypeDefinitionNode,
    FieldDefinitionNode,
    InputObjectTypeDefinitionNode,
    InputValueDefinitionNode,
    InterfaceTypeDefinitionNode,
    NamedTypeNode,
    ObjectTypeDefinitionNode,
    SchemaDefinitionNode,
    TypeSystemDefinitionNode,
    UnionTypeDefinitionNode,
)

from graphql_import import log
from graphql_import.definitions import (
    get_named_type,
    get_node_name,
    index_definitions,
    is_builtin_directive,
    is_builtin_scalar,
    unique_by_name,
)
from graphql_import.errors import (
    ImportErrorMessages,
    MissingDirectiveError,
    MissingInterfaceError,
    MissingTypeError,
)


def complete_definition_pool(
    all_definitions: Sequence[TypeSystemDefinitionNode],
    definition_pool: Sequence[TypeSystemDefinitionNode],
    new_type_definitions: Sequence[TypeSystemDefinitionNode],
) -> list[TypeSystemDefinitionNode]:
    """Expand the definition pool to every definition it transitively depends on.

    Args:
        all_definitions: All definitions of all traversed fragments, in visitation order
        definition_pool: Definitions already part of the result (merged root types and root fragment types)
        new_type_definitions: Definitions to process, i.e. everything requested by the import lines

    Returns:
        The completed pool, deduplicated by name with the first occurrence kept

    Raises:
        MissingTypeError: If a field, argument, union member or operation type cannot be found
        MissingInterfaceError: If an implemented interface cannot be found
        MissingDirectiveError: If an applied directive cannot be found
    """
    schema_map = index_definitions(all_definitions)
    pool = list(definition_pool)
    pool_names = {get_node_name(definition) for definition in pool}
    queue = deque(new_type_definitions)
    visited: set[str] = set()

    while queue:
        new_definition = queue.popleft()
        name = get_node_name(new_definition)
        if name in visited:
            continue

        collected = collect_new_type_definitions(all_definitions, pool_names, new_definition, schema_map)
        if collected:
            log.debug(f"{name} pulled in {', '.join(get_node_name(definition) for definition in collected)}")
        queue.extend(collected)
        pool.extend(collected)
        pool_names.update(get_node_name(definition) for definition in collected)

        visited.add(name)

    return unique_by_name(pool)


def collect_new_type_definitions(
    all_definitions: Sequence[TypeSystemDefinitionNode],
    pool_names: set[str],
    new_definition: TypeSystemDefinitionNode,
    schema_map: dict[str, TypeSystemDefinitionNode],
) -> list[TypeSystemDefinitionNode]:
    """Find the definitions a single definition depends on that are not in the pool yet.

    Args:
        all_definitions: All definitions of all traversed fragments, searched for interface implementations
        pool_names: Names of the definitions already in the pool
        new_definition: The definition to inspect
        schema_map: Lookup of all definitions by name

    Returns:
        The newly discovered definitions, in discovery order
    """
    new_type_definitions: list[TypeSystemDefinitionNode] = []

    def is_known(name: str) -> bool:
        return name in pool_names or any(get_node_name(d) == name for d in new_type_definitions)

    def add(definition: TypeSystemDefinitionNode) -> None:
        if not is_known(get_node_name(definition)):
            new_type_definitions.append(definition)

    def collect_node(node: FieldDefinitionNode | InputValueDefinitionNode) -> None:
        type_name = get_named_type(node.type).name.value
        if not is_known(type_name) and not is_builtin_scalar(type_name):
            type_match = schema_map.get(type_name)
            if type_match is None:
                raise MissingTypeError(
                    ImportErrorMessages.MISSING_FIELD_TYPE.format(field=node.name.value, type_name=type_name)
                )
            add(type_match)

        for directive in node.directives or ():
            collect_directive(directive)

    def collect_field(field: FieldDefinitionNode) -> None:
        collect_node(field)
        for argument in field.arguments or ():
            collect_node(argument)

    def collect_directive(directive: DirectiveNode) -> None:
        directive_name = directive.name.value
        if is_known(directive_name) or is_builtin_directive(directive_name):
            return

        directive_match = schema_map.get(directive_name)
        if not isinstance(directive_match, DirectiveDefinitionNode):
            raise MissingDirectiveError(ImportErrorMessages.MISSING_DIRECTIVE.format(directive=directive_name))

        for argument in directive_match.arguments or ():
            collect_node(argument)
        add(directive_match)

    def collect_interface(interface: NamedTypeNode) -> None:
        interface_name = interface.name.value
        if is_known(interface_name):
            return

        interface_match = schema_map.get(interface_name)
        if interface_match is None:
            raise MissingInterfaceError(ImportErrorMessages.MISSING_INTERFACE.format(interface=interface_name))
        add(interface_match)

    def collect_type(type_node: NamedTypeNode) -> None:
        type_name = type_node.name.value
        if is_known(type_name):
            return

        type_match = schema_map.get(type_name)
        if type_match is None:
            raise MissingTypeError(ImportErrorMessages.MISSING_TYPE.format(type_name=type_name))
        add(type_match)

    if not isinstance(new_definition, DirectiveDefinitionNode):
        for directive in new_definition.directives or ():
            collect_directive(directive)

    if isinstance(new_definition, DirectiveDefinitionNode):
        for argument in new_definition.arguments or ():
            collect_node(argument)

    elif isinstance(new_definition, InputObjectTypeDefinitionNode):
        for input_field in new_definition.fields or ():
            collect_node(input_field)

    elif isinstance(new_definition, InterfaceTypeDefinitionNode):
        for interface in new_definition.interfaces or ():
            collect_interface(interface)
        for field in new_definition.fields or ():
            collect_field(field)

        interface_name = new_definition.name.value
        for definition in all_definitions:
            if isinstance(definition, ObjectTypeDefinitionNode) and any(
                interface.name.value == interface_name for interface in definition.interfaces or ()
            ):
                add(definition)

    elif isinstance(new_definition, UnionTypeDefinitionNode):
        for member in new_definition.types or ():
            collect_type(member)

    elif isinstance(new_definition, EnumTypeDefinitionNode):
        for value in new_definition.values or ():
            for directive in value.directives or ():
                collect_directive(directive)

    elif isinstance(new_definition, ObjectTypeDefinitionNode):
        for interface in new_definition.interfaces or ():
            collect_interface(interface)
        for field in new_definition.fields or ():
            collect_field(field)

    elif isinstance(new_definition, SchemaDefinitionNode):
        # Include types when a name other than Query/Mutation/Subscription is used
        for operation_type in new_definition.operation_types or ():
            collect_type(operation_type.type)

    return new_type_definitions
