"""Errors raised while resolving `# import` directives into a single schema.

Every error is fatal: the top-level call is aborted and no partial schema is produced.
"""


class ImportErrorMessages:
    """Message templates shared by the errors below."""

    MALFORMED_IMPORT_LINE = "Malformed import line: {line!r}"
    INVALID_IMPORT_NAME = "Malformed import line: {line!r} ({name!r} is not a valid import name)"
    MISSING_FIELD_TYPE = "Field {field}: Couldn't find type {type_name} in any of the schemas."
    MISSING_TYPE = "Couldn't find type {type_name} in any of the schemas."
    MISSING_INTERFACE = "Couldn't find interface {interface} in any of the schemas."
    MISSING_DIRECTIVE = "Directive {directive}: Couldn't find type {directive} in any of the schemas."
    MODULE_NOT_FOUND = "Cannot find module '{target}' from '{directory}'"


class ImportSchemaError(ValueError):
    """Base class for every error raised by graphql-import."""


class MalformedImportLineError(ImportSchemaError):
    """Raised when an import comment does not match `import <names> from "<path>"`."""


class MissingDefinitionError(ImportSchemaError):
    """Raised when a referenced name resolves to no definition in the traversed fragments."""


class MissingTypeError(MissingDefinitionError):
    """Raised when a field, argument, union member or operation type names an unknown type."""


class MissingInterfaceError(MissingDefinitionError):
    """Raised when a type implements an interface that is not defined anywhere."""


class MissingDirectiveError(MissingDefinitionError):
    """Raised when an applied directive is neither builtin nor defined anywhere."""


class SchemaModuleNotFoundError(ImportSchemaError, FileNotFoundError):
    """Raised when an import target can be resolved neither relatively nor as a module."""
