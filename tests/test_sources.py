from pathlib import Path

import pytest

from graphql_import.errors import SchemaModuleNotFoundError
from graphql_import.sources import (
    is_schema_file,
    is_schema_glob,
    location_key,
    read_schema,
    resolve_module_file_path,
)
from tests.conftest import TestSchemaData, data_file


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("schema.graphql", True),
        ("  ../schema.gql ", True),
        ("dir/*.graphql", True),
        ("shared", False),
        ("type A { id: ID }", False),
        ("schema.graphql.bak", False),
        ("type A { id: ID }\n# see schema.graphql", False),
    ],
)
def test_is_schema_file(value: str, expected: bool) -> None:
    assert is_schema_file(value) is expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("dir/*.graphql", True),
        ("dir/**/*.gql", True),
        ("dir/schema.graphql", False),
        ("type Query { list: [Int] } # *", False),
        ('# import * from "b.graphql"\ntype Query { b: String }', False),
    ],
)
def test_is_schema_glob(value: str, expected: bool) -> None:
    assert is_schema_glob(value) is expected


def test_location_key_resolves_files_only() -> None:
    assert location_key("shared") == "shared"
    expected = str(Path(data_file("scenario", "root.graphql")).resolve())
    assert location_key(data_file("scenario", "..", "scenario", "root.graphql")) == expected


def test_read_schema_file() -> None:
    assert "type Comment" in read_schema(data_file("scenario", "comments.graphql"))


def test_read_schema_glob_joins_sorted_matches() -> None:
    content = read_schema(data_file("import-glob", "*.graphql"))
    assert content.index("movie(id: ID!)") < content.index("book(id: ID!)")
    assert "type Mutation" in content


def test_read_schema_named_and_inline() -> None:
    schemas = {"shared": "type Shared { first: String }"}
    assert read_schema("shared", schemas) == schemas["shared"]
    assert read_schema("type A { id: ID }", schemas) == "type A { id: ID }"
    assert read_schema("type A { id: ID }") == "type A { id: ID }"


@pytest.mark.parametrize(
    "text",
    [
        '# import * from "b.graphql"\ntype Query { b: String }',
        '"""Use * as in schema.graphql"""\ntype Query { a: String }',
        "type A { id: ID }\n# see schema.graphql",
    ],
    ids=["wildcard_import", "description", "trailing_file_name"],
)
def test_read_schema_multiline_text_is_inline(text: str) -> None:
    assert read_schema(text) == text


def test_read_schema_glob_without_matches_is_inline() -> None:
    pattern = data_file("import-glob", "*.gql")
    assert read_schema(pattern) == pattern


def test_read_schema_directory(tmp_path: Path) -> None:
    (tmp_path / "a.graphql").write_text("type A { id: ID }")
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "b.graphql").write_text("type B { id: ID }")

    content = read_schema(str(tmp_path))
    assert "type A" in content
    assert "type B" in content


def test_read_schema_missing_file() -> None:
    with pytest.raises(FileNotFoundError):
        read_schema(data_file("does-not-exist.graphql"))


def test_resolve_relative_path() -> None:
    resolved = resolve_module_file_path(data_file("relative-paths", "src", "schema.graphql"), "types/post.graphql")
    assert Path(resolved) == Path(data_file("relative-paths", "src", "types", "post.graphql")).resolve()

    resolved = resolve_module_file_path(
        data_file("relative-paths", "src", "types", "post.graphql"), "../../generated/schema.graphql"
    )
    assert Path(resolved) == Path(data_file("relative-paths", "generated", "schema.graphql")).resolve()


def test_resolve_from_module_directory() -> None:
    resolved = resolve_module_file_path(data_file("import-module", "a.graphql"), "graphql-import-test/b.graphql")
    expected = Path(data_file("import-module", "node_modules", "graphql-import-test", "b.graphql")).resolve()
    assert Path(resolved) == expected


def test_resolve_from_custom_module_directory(tmp_path: Path) -> None:
    (tmp_path / "graphql_modules" / "shared").mkdir(parents=True)
    (tmp_path / "graphql_modules" / "shared" / "types.graphql").write_text("type Shared { id: ID }")
    (tmp_path / "app").mkdir()

    resolved = resolve_module_file_path(
        str(tmp_path / "app" / "schema.graphql"), "shared/types.graphql", module_dirs=["graphql_modules"]
    )
    assert Path(resolved) == (tmp_path / "graphql_modules" / "shared" / "types.graphql").resolve()


def test_resolve_from_python_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    package = tmp_path / "site" / "sdl_fixture_package"
    package.mkdir(parents=True)
    (package / "__init__.py").write_text("")
    (package / "types.graphql").write_text("type Packaged { id: ID }")
    monkeypatch.syspath_prepend(str(tmp_path / "site"))

    resolved = resolve_module_file_path(data_file("scenario", "root.graphql"), "sdl_fixture_package/types.graphql")
    assert Path(resolved).resolve() == (package / "types.graphql").resolve()


def test_resolve_unknown_module() -> None:
    with pytest.raises(SchemaModuleNotFoundError, match="Cannot find module 'missing-package/a.graphql'"):
        resolve_module_file_path(data_file("scenario", "root.graphql"), "missing-package/a.graphql")


@pytest.mark.parametrize(
    ("file_path", "import_from"),
    [
        (data_file("global", "a.graphql"), "shared"),
        ("schemaA", "schemaB"),
        ("type A { id: ID }", "b.graphql"),
    ],
    ids=["named_schema_from_file", "named_schemas", "inline_sdl"],
)
def test_resolve_passes_through_non_file_locations(file_path: str, import_from: str) -> None:
    assert resolve_module_file_path(file_path, import_from) == import_from


def test_data_directory_exists() -> None:
    assert TestSchemaData.TESTS_DATA_DIR.is_dir()
