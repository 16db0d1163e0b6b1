import re
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from graphql_import import log
from graphql_import.sources import DEFAULT_MODULE_DIRS

GRAPHQL_NAME_PATTERN = re.compile(r"^[_A-Za-z][_0-9A-Za-z]*$")


class ImportSchemaOptions(BaseModel):
    """Options of `import_schema`.

    Attributes:
        schemas: Named in-memory schemas that import lines and the root schema can refer to
        mergeable_types: Type names merged across fragments like Query, Mutation and Subscription
        module_dirs: Directory names searched in ancestor directories when resolving module imports
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    schemas: dict[str, str] | None = None
    mergeable_types: list[str] = Field(default_factory=list, alias="mergeableTypes")
    module_dirs: list[str] = Field(default_factory=lambda: list(DEFAULT_MODULE_DIRS), alias="moduleDirs")

    @field_validator("mergeable_types")
    @classmethod
    def validate_mergeable_type_names(cls, value: list[str]) -> list[str]:
        invalid = [name for name in value if not GRAPHQL_NAME_PATTERN.match(name)]
        if invalid:
            raise ValueError(f"Mergeable types must be GraphQL names, got: {', '.join(map(repr, invalid))}")
        return value


def load_import_config(config_path: Path | None) -> ImportSchemaOptions:
    """
    Load and validate import options from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None for the defaults.

    Returns:
        The validated options.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the file is not valid YAML.
        TypeError: If the YAML root is not a mapping.
        ValidationError: If validation against ImportSchemaOptions fails.
    """
    if config_path is None:
        log.debug("No import config provided")
        return ImportSchemaOptions()

    raw: Any
    with config_path.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    log.debug("Loaded import config from %s", config_path)

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None or raw == {}:
        return ImportSchemaOptions()

    if not isinstance(raw, dict):
        raise TypeError(f"Import config root must be a mapping (YAML object), got {type(raw).__name__}")

    return ImportSchemaOptions.model_validate(cast(dict[str, Any], raw))
