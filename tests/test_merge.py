from graphql_import.definitions import print_definitions
from graphql_import.merge import ROOT_FIELDS, get_mergeable_names, merge_definitions, merge_root_definitions
from tests.conftest import definition_names, parse_definitions, sdl


def test_mergeable_names_include_root_fields() -> None:
    assert get_mergeable_names() == frozenset(ROOT_FIELDS)
    assert get_mergeable_names(["Dummy"]) == frozenset({"Dummy", *ROOT_FIELDS})


def test_merge_query_fields_in_fragment_order() -> None:
    first = parse_definitions("type Query { a: String }")
    second = parse_definitions("type Query { b: Int }")

    merged = merge_root_definitions([first, second])

    assert print_definitions(merged).strip() == sdl(
        """
        type Query {
          a: String
          b: Int
        }
        """
    )


def test_merge_leaves_originals_untouched() -> None:
    first = parse_definitions("type Query { a: String }")
    second = parse_definitions("type Query { b: Int }")

    merge_root_definitions([first, second])

    assert [field.name.value for field in first[0].fields] == ["a"]
    assert [field.name.value for field in second[0].fields] == ["b"]


def test_merge_schema_operation_types() -> None:
    first = parse_definitions("schema { query: Query }")
    second = parse_definitions("schema { mutation: Mutation }")

    merged = merge_root_definitions([first, second])

    assert definition_names(merged) == ["schema"]
    assert [operation.type.name.value for operation in merged[0].operation_types] == ["Query", "Mutation"]


def test_merge_skips_identical_members() -> None:
    fragment = parse_definitions("type Query { a: String }")
    again = parse_definitions("type Query { a: String b: Int }")

    merged = merge_root_definitions([fragment, fragment, again])

    assert [field.name.value for field in merged[0].fields] == ["a", "b"]


def test_merge_configured_types_and_enums() -> None:
    first = parse_definitions("type Dummy { field: String } enum Role { ADMIN }")
    second = parse_definitions("type Dummy { field2: Int } enum Role { USER }")

    merged = merge_root_definitions([first, second], ["Dummy", "Role"])

    assert print_definitions(merged).strip() == sdl(
        """
        type Dummy {
          field: String
          field2: Int
        }

        enum Role {
          ADMIN
          USER
        }
        """
    )


def test_non_mergeable_types_come_from_the_root_fragment_only() -> None:
    first = parse_definitions("type Query { posts: [Post] } type Post { id: ID }")
    second = parse_definitions("type Query { users: [User] } type User { id: ID }")

    merged = merge_root_definitions([first, second])

    assert definition_names(merged) == ["Query", "Post"]


def test_root_types_of_nested_fragments_are_merged_first_seen() -> None:
    first = parse_definitions("type Post { id: ID }")
    second = parse_definitions("type Mutation { b: Int } type Query { a: Int }")

    assert definition_names(merge_root_definitions([first, second])) == ["Mutation", "Query", "Post"]


def test_merge_definitions_of_different_kinds() -> None:
    existing = parse_definitions("scalar Dummy")[0]
    other = parse_definitions("type Dummy { id: ID }")[0]

    assert merge_definitions(existing, other) is existing


def test_merge_without_fragments() -> None:
    assert merge_root_definitions([]) == []
