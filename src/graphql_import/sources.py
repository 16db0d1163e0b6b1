"""Loading schema sources and resolving import targets to locations."""

import glob
import importlib.util
import os
import re
from collections.abc import Mapping, Sequence
from pathlib import Path

from ariadne import load_schema_from_path

from graphql_import import log
from graphql_import.errors import ImportErrorMessages, SchemaModuleNotFoundError

SCHEMA_FILE_SUFFIXES = (".graphql", ".gql")
SCHEMA_GLOB_PATTERN = re.compile(r"\*.*\.(graphql|gql)")
DEFAULT_MODULE_DIRS = ("node_modules",)


def is_path_like(location: str) -> bool:
    """Paths and globs fit on one line; anything longer is inline SDL."""
    return "\n" not in location.strip()


def is_schema_file(location: str) -> bool:
    return is_path_like(location) and location.strip().endswith(SCHEMA_FILE_SUFFIXES)


def is_schema_glob(location: str) -> bool:
    return is_path_like(location) and SCHEMA_GLOB_PATTERN.search(location) is not None


def location_key(location: str) -> str:
    """Key used to recognise an already visited location: absolute path for files, the location otherwise."""
    if is_schema_file(location):
        return str(Path(location.strip()).resolve())
    return location


def read_schema(schema: str, schemas: Mapping[str, str] | None = None) -> str:
    """Read the SDL behind a location.

    Args:
        schema: A file path, a glob pattern, a directory, a key of `schemas` or inline SDL
        schemas: Named in-memory schemas

    Returns:
        The SDL text. Glob matches are joined with newlines in sorted order; an unknown location
        is returned as is, so inline SDL can be passed wherever a location is expected.

    Raises:
        FileNotFoundError: If a file path does not exist
    """
    if is_schema_glob(schema):
        matches = sorted(glob.glob(schema.strip()))
        if matches:
            log.debug(f"Glob {schema} matched {len(matches)} file(s)")
            return "\n".join(Path(match).read_text(encoding="utf-8") for match in matches)

    if is_schema_file(schema) and not is_schema_glob(schema):
        return Path(schema.strip()).read_text(encoding="utf-8")

    if schemas and schema in schemas:
        return schemas[schema]

    if os.path.isdir(schema):
        return load_schema_from_path(schema)

    return schema


def resolve_module_file_path(
    file_path: str, import_from: str, module_dirs: Sequence[str] = DEFAULT_MODULE_DIRS
) -> str:
    """Resolve the target of an import line made from `file_path`.

    The target is first looked up relative to the importing file. When that file does not exist it is
    resolved as a module: `<ancestor>/<module dir>/<target>` for every ancestor directory of the importing
    file, then inside an installed Python package named by the first segment of the target.
    Imports made from (or pointing to) something other than a schema file are returned unchanged.

    Args:
        file_path: Location of the schema containing the import line
        import_from: Location given in the import line
        module_dirs: Directory names searched in every ancestor directory

    Returns:
        The resolved location

    Raises:
        SchemaModuleNotFoundError: If the target cannot be found relatively nor as a module
    """
    if not (is_schema_file(file_path) and is_schema_file(import_from)):
        return import_from

    directory = Path(file_path.strip()).parent
    candidate = directory / import_from.strip()
    if candidate.exists():
        return str(candidate.resolve())

    return resolve_module(directory, import_from.strip(), module_dirs)


def resolve_module(directory: Path, import_from: str, module_dirs: Sequence[str] = DEFAULT_MODULE_DIRS) -> str:
    directory = directory.resolve()
    for ancestor in (directory, *directory.parents):
        for module_dir in module_dirs:
            candidate = ancestor / module_dir / import_from
            if candidate.is_file():
                log.debug(f"Resolved {import_from} to {candidate}")
                return str(candidate)

    package_file = _find_in_package(import_from)
    if package_file is not None:
        log.debug(f"Resolved {import_from} to {package_file}")
        return str(package_file)

    raise SchemaModuleNotFoundError(ImportErrorMessages.MODULE_NOT_FOUND.format(target=import_from, directory=directory))


def _find_in_package(import_from: str) -> Path | None:
    package, _, resource = import_from.partition("/")
    if not resource or not package.isidentifier():
        return None

    spec = importlib.util.find_spec(package)
    if spec is None or not spec.submodule_search_locations:
        return None

    for location in spec.submodule_search_locations:
        candidate = Path(location) / resource
        if candidate.is_file():
            return candidate
    return None
