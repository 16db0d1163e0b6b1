from collections.abc import Callable
from pathlib import Path
from textwrap import dedent
from typing import Any

import pytest
from graphql import TypeSystemDefinitionNode
from hypothesis import strategies as st
from hypothesis.strategies import composite

from graphql_import.definitions import filter_type_definitions, get_document_from_sdl, get_node_name


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    CONFIG: Path = TESTS_DATA_DIR / "config" / "import.yaml"
    SCENARIO_ROOT: Path = TESTS_DATA_DIR / "scenario" / "root.graphql"
    COMPLEX_ROOT: Path = TESTS_DATA_DIR / "complex" / "a.graphql"


def data_file(*parts: str) -> str:
    """Absolute path (as a location string) of a schema under tests/data."""
    return str(TestSchemaData.TESTS_DATA_DIR.joinpath(*parts))


def sdl(text: str) -> str:
    """Dedent an expected SDL snippet and drop the surrounding blank lines."""
    return dedent(text).strip()


def parse_definitions(text: str) -> list[TypeSystemDefinitionNode]:
    return filter_type_definitions(get_document_from_sdl(dedent(text)).definitions)


def definition_names(definitions: list[TypeSystemDefinitionNode]) -> list[str]:
    return [get_node_name(definition) for definition in definitions]


@pytest.fixture
def scenario_root() -> str:
    assert TestSchemaData.SCENARIO_ROOT.exists(), f"Missing test file: {TestSchemaData.SCENARIO_ROOT}"
    return str(TestSchemaData.SCENARIO_ROOT)


@composite
def import_chains(
    draw: Callable[[st.SearchStrategy[Any]], Any], max_length: int = 6
) -> tuple[dict[str, str], int, bool]:
    """Named schemas s0..sN where every s<i> imports T<i+1> from s<i+1> and references it from T<i>.

    Returns the schemas, the number of types and whether the last schema imports T0 back from s0.
    """
    length = draw(st.integers(min_value=1, max_value=max_length))
    circular = draw(st.booleans())

    schemas: dict[str, str] = {}
    for index in range(length):
        next_index = index + 1
        if next_index < length:
            schemas[f"s{index}"] = (
                f'# import T{next_index} from "s{next_index}"\n'
                f"type T{index} {{\n  id: ID!\n  next: T{next_index}\n}}\n"
            )
        elif circular:
            schemas[f"s{index}"] = f'# import T0 from "s0"\ntype T{index} {{\n  id: ID!\n  first: T0\n}}\n'
        else:
            schemas[f"s{index}"] = f"type T{index} {{\n  id: ID!\n}}\n"

    return schemas, length, circular
