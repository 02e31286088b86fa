"""Schema validation for arbitrary data against JSON Schema documents.

Loads schema documents, compiles them into validators and reports
validation failures as human-readable messages.
"""

import json
import logging
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from pydantic import TypeAdapter, ValidationError

from config.settings import CHECK_SCHEMA_DOCUMENTS, SCHEMAS_DIR
from execution.schema_compiler import convert

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".schema.json"


def load_schema(schema_path: str | Path, check: bool | None = None) -> dict:
    """Load a JSON Schema file.

    Args:
        schema_path: Path to the schema file.
        check: Check the document against the JSON Schema meta-schema.
            Defaults to CHECK_SCHEMA_DOCUMENTS.

    Returns:
        The schema dictionary.

    Raises:
        FileNotFoundError: If the schema file does not exist.
        jsonschema.SchemaError: If the document is not a valid JSON Schema.
    """
    path = Path(schema_path)
    with open(path, "r", encoding="utf-8") as f:
        schema = json.load(f)

    if CHECK_SCHEMA_DOCUMENTS if check is None else check:
        Draft202012Validator.check_schema(schema)

    logger.debug("Loaded schema %s", path)
    return schema


def list_schemas(schemas_dir: str | Path | None = None) -> list[str]:
    """Return the names of the schema documents in a directory, sorted."""
    directory = Path(schemas_dir or SCHEMAS_DIR)
    if not directory.is_dir():
        return []
    return sorted(p.name[: -len(SCHEMA_SUFFIX)] for p in directory.glob(f"*{SCHEMA_SUFFIX}"))


def schema_path_for(name: str, schemas_dir: str | Path | None = None) -> Path:
    """Resolve a schema name to its file path.

    Raises:
        ValueError: If the name is empty or would escape the schemas directory.
    """
    if not name or "/" in name or "\\" in name or name.startswith("."):
        raise ValueError(f"Invalid schema name: {name!r}")
    return Path(schemas_dir or SCHEMAS_DIR) / f"{name}{SCHEMA_SUFFIX}"


def compile_schema(schema: dict | str | Path) -> TypeAdapter:
    """Compile a schema dict, or a schema file path, into a validator.

    Raises:
        SchemaConversionError: If the schema cannot be represented.
    """
    if not isinstance(schema, dict):
        schema = load_schema(schema)
    validator = convert(schema)
    logger.debug("Compiled schema (type=%r, title=%r)", schema.get("type"), schema.get("title"))
    return validator


def validate_against_schema(data: Any, schema: dict | str | Path) -> Any:
    """Validate data against a JSON Schema.

    Args:
        data: The value to validate.
        schema: A schema dict or the path to a schema file.

    Returns:
        The validated value. Objects only keep their declared keys.

    Raises:
        pydantic.ValidationError: If validation fails.
    """
    return compile_schema(schema).validate_python(data)


def format_errors(error: ValidationError) -> list[str]:
    """Render a ValidationError as 'dotted.path: message' lines."""
    return [
        f"{'.'.join(str(p) for p in e['loc']) or 'root'}: {e['msg']}"
        for e in error.errors()
    ]


def get_validation_errors(data: Any, schema: dict | str | Path) -> list[str]:
    """Return all validation errors for a value.

    Args:
        data: The value to validate.
        schema: A schema dict or the path to a schema file.

    Returns:
        List of human-readable error messages. Empty if valid.
    """
    validator = compile_schema(schema)
    try:
        validator.validate_python(data)
    except ValidationError as e:
        return format_errors(e)
    return []


def is_valid(data: Any, schema: dict | str | Path) -> bool:
    """Check if a value is valid without raising validation errors.

    Schema construction errors still propagate.
    """
    try:
        validate_against_schema(data, schema)
        return True
    except ValidationError:
        return False


def run_validation(data: Any, schema: dict | str | Path) -> dict:
    """Validate a value and return a structured report.

    Returns:
        Dict with 'valid' bool, 'data' (the validated value, or None when
        invalid) and 'errors' list.
    """
    validator = compile_schema(schema)
    try:
        validated = validator.validate_python(data)
    except ValidationError as e:
        errors = format_errors(e)
        logger.info("Validation failed with %d error(s)", len(errors))
        return {"valid": False, "data": None, "errors": errors}
    return {"valid": True, "data": validated, "errors": []}
