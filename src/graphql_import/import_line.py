"""Parsing of `# import` comment directives.

A fragment pulls definitions from other fragments with comment lines such as::

    # import Post, Comment from "posts.graphql"
    # import Query.posts from 'queries.graphql'
    # import * from "shared"
"""

import re
from dataclasses import dataclass

from graphql_import.errors import ImportErrorMessages, MalformedImportLineError

WILDCARD = "*"

IMPORT_LINE_PATTERN = re.compile(r"""^import (.+) from (['"])(.*)\2;?$""")
IMPORT_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*(\.([_A-Za-z][_0-9A-Za-z]*|\*))?$")
IMPORT_COMMENT_PREFIXES = ("# import ", "#import ")


@dataclass(frozen=True)
class ImportRequest:
    """A single parsed import line.

    Attributes:
        imports: Either the singleton ("*",) or the imported names, possibly dotted as `Type.field`
        source: Location the names are imported from, as written (path, module or schema name)
    """

    imports: tuple[str, ...]
    source: str

    @property
    def is_wildcard(self) -> bool:
        return self.imports == (WILDCARD,)


def parse_import_line(import_line: str) -> ImportRequest:
    """Parse a single import line and extract the imported names and their source.

    Args:
        import_line: The line without its leading `#`, e.g. `import A, B from "schema.graphql"`

    Returns:
        The parsed import request

    Raises:
        MalformedImportLineError: If the line does not match the import grammar or has an empty path
    """
    match = IMPORT_LINE_PATTERN.match(import_line)
    if not match or not match.group(3):
        raise MalformedImportLineError(ImportErrorMessages.MALFORMED_IMPORT_LINE.format(line=import_line))

    names, _, source = match.groups()
    if names.strip() == WILDCARD:
        return ImportRequest(imports=(WILDCARD,), source=source)

    imports = tuple(name.strip() for name in names.split(","))
    for name in imports:
        if not IMPORT_NAME_PATTERN.match(name):
            raise MalformedImportLineError(ImportErrorMessages.INVALID_IMPORT_NAME.format(line=import_line, name=name))

    return ImportRequest(imports=imports, source=source)


def parse_sdl(sdl: str) -> list[ImportRequest]:
    """Collect the import requests of a schema, in file order.

    Only comment lines starting with `# import ` or `#import ` are considered; other comments are ignored.
    """
    lines = (line.strip() for line in sdl.split("\n"))
    return [
        parse_import_line(line.replace("#", "", 1).strip())
        for line in lines
        if line.startswith(IMPORT_COMMENT_PREFIXES)
    ]
