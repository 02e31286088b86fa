"""Compile JSON Schema documents into pydantic validators.

Each schema node is turned into a pydantic type annotation (strict scalars,
``list[...]``, dynamically created models, ``Union``/``Optional`` and
``AfterValidator`` refinements). ``convert`` wraps the result in a
``TypeAdapter``, which validates runtime values and reports failures as
``pydantic.ValidationError``.

String formats use pydantic's lax parsers, so they are looser than the
JSON Schema format definitions: ``date-time`` also accepts a bare date or a
numeric timestamp string, ``date`` accepts a midnight datetime string and
``uuid`` accepts the 32-digit form without hyphens.

The compiler is a pure function of its input: schema nodes are never
modified, and nothing is cached between calls.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Annotated, Any, Optional, Union
from uuid import UUID

from pydantic import (
    AfterValidator,
    AnyUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
    create_model,
)
from pydantic_core import PydanticCustomError

from execution.exceptions import SchemaConversionError
from execution.schema_merge import merge_all

COMPOSITE_KEYWORDS = ("oneOf", "anyOf", "allOf")

# JSON numbers are finite.
FiniteFloat = Annotated[StrictFloat, Field(allow_inf_nan=False)]

# Native pydantic validators backing the supported string formats.
FORMAT_VALIDATORS = {
    "email": TypeAdapter(EmailStr),
    "date-time": TypeAdapter(datetime),
    "uri": TypeAdapter(AnyUrl),
    "uuid": TypeAdapter(UUID),
    "date": TypeAdapter(date),
}


def convert(schema: Mapping) -> TypeAdapter:
    """Convert a JSON schema into a reusable validator.

    Args:
        schema: The JSON schema node (already deserialized).

    Returns:
        A TypeAdapter whose ``validate_python`` returns the validated value
        or raises ``pydantic.ValidationError``.

    Raises:
        SchemaConversionError: If the schema cannot be represented.
    """
    return TypeAdapter(to_annotation(schema))


def to_annotation(schema: Mapping) -> Any:
    """Build the pydantic type annotation for a JSON schema.

    Useful for embedding a compiled schema as a field type of another model.
    """
    return _compile(schema, "#")


# ---------------------------------------------------------------------------
# Type dispatch
# ---------------------------------------------------------------------------


def _compile(schema: Mapping, path: str) -> Any:
    if not isinstance(schema, Mapping):
        raise SchemaConversionError(
            f"Schema node must be an object, got {type(schema).__name__}", path
        )

    schema_type = schema.get("type")
    if isinstance(schema_type, (list, tuple)):
        return _build_type_array(schema, path)

    if isinstance(schema_type, str) and schema_type in TYPE_BUILDERS:
        return TYPE_BUILDERS[schema_type](schema, path)

    if any(keyword in schema for keyword in COMPOSITE_KEYWORDS):
        return _build_composite(schema, path)

    if schema_type is None:
        if "properties" in schema:
            return _build_object(schema, path)
        return Any

    raise SchemaConversionError(f"Unsupported schema type: {schema_type!r}", path)


def _build_type_array(schema: Mapping, path: str) -> Any:
    """Compile ``type: [...]`` as a union, or a nullable when it lists ``null``."""
    tags = list(schema["type"])
    non_null = [tag for tag in tags if tag != "null"]

    if not non_null:
        if tags:
            return None
        raise SchemaConversionError("Type array must list at least one type", path)

    if len(non_null) < len(tags):
        # A single remaining tag goes back through the scalar path so that
        # format and enum handling still apply.
        stripped = {**schema, "type": non_null[0] if len(non_null) == 1 else non_null}
        return Optional[_compile(stripped, path)]

    return _choice([_compile({**schema, "type": tag}, path) for tag in non_null])


def _choice(annotations: list) -> Any:
    if len(annotations) == 1:
        return annotations[0]
    return Union[tuple(annotations)]


# ---------------------------------------------------------------------------
# Leaf builders
# ---------------------------------------------------------------------------


def _format_refinement(fmt: str):
    validator = FORMAT_VALIDATORS[fmt]

    def check_format(value: str) -> str:
        try:
            validator.validate_python(value)
        except ValidationError as e:
            raise PydanticCustomError(
                "format",
                "Invalid {format}: {reason}",
                {"format": fmt, "reason": e.errors()[0]["msg"]},
            ) from e
        return value

    return check_format


def _enum_refinement(values: list):
    allowed = list(values)
    joined = ", ".join(str(v) for v in allowed)

    def check_member(value):
        if value not in allowed:
            raise PydanticCustomError("enum", "Value must be one of: {allowed}", {"allowed": joined})
        return value

    return check_member


def _with_enum(annotation: Any, schema: Mapping) -> Any:
    if "enum" not in schema:
        return annotation
    return Annotated[annotation, AfterValidator(_enum_refinement(schema["enum"]))]


def _build_string(schema: Mapping, path: str) -> Any:
    annotation = StrictStr
    fmt = schema.get("format")
    if isinstance(fmt, str) and fmt in FORMAT_VALIDATORS:
        annotation = Annotated[annotation, AfterValidator(_format_refinement(fmt))]
    # Enum is layered after the format check.
    return _with_enum(annotation, schema)


def _build_number(schema: Mapping, path: str) -> Any:
    return _with_enum(Union[StrictInt, FiniteFloat], schema)


def _require_integral(value: float) -> float:
    if not value.is_integer():
        raise PydanticCustomError("integer", "Input should be a valid integer, got a number with a fractional part")
    return value


def _build_integer(schema: Mapping, path: str) -> Any:
    # Integral floats such as 5.0 count as integers.
    integral_float = Annotated[FiniteFloat, AfterValidator(_require_integral)]
    return _with_enum(Union[StrictInt, integral_float], schema)


def _build_boolean(schema: Mapping, path: str) -> Any:
    return _with_enum(StrictBool, schema)


def _build_null(schema: Mapping, path: str) -> Any:
    return None


# ---------------------------------------------------------------------------
# Container builders
# ---------------------------------------------------------------------------


def _build_array(schema: Mapping, path: str) -> Any:
    items = schema.get("items")
    if items is None:
        raise SchemaConversionError('Array schema must have "items" defined', path)

    if isinstance(items, (list, tuple)):
        if not items:
            raise SchemaConversionError('Array schema "items" list must not be empty', path)
        # Every element is checked against the union of all positions.
        item_annotation = _choice(
            [_compile(item, f"{path}/items/{i}") for i, item in enumerate(items)]
        )
    else:
        item_annotation = _compile(items, f"{path}/items")

    return list[item_annotation]


def _catchall_base(extra_annotation: Any) -> type[BaseModel]:
    """Base model that accepts unknown keys, validating each one."""

    class CatchallModel(BaseModel):
        model_config = ConfigDict(extra="allow")
        __pydantic_extra__: dict[str, extra_annotation]

    return CatchallModel


def _declared_fields(model: BaseModel) -> dict:
    """Turn a validated model into a dict of the declared keys that were given."""
    fields = type(model).model_fields
    return {
        fields[name].alias: getattr(model, name)
        for name in fields
        if name in model.model_fields_set
    }


def _build_object(schema: Mapping, path: str) -> Any:
    required = set(schema.get("required") or [])
    fields = {}
    for index, (key, child) in enumerate((schema.get("properties") or {}).items()):
        annotation = _compile(child, f"{path}/properties/{key}")
        # Field names are positional so any property name can be used as an alias.
        if key in required:
            fields[f"field_{index}"] = (annotation, Field(alias=key))
        else:
            fields[f"field_{index}"] = (annotation, Field(default=None, alias=key))

    model_name = str(schema.get("title") or "Object")
    additional = schema.get("additionalProperties")

    if additional is True:
        model = create_model(model_name, __config__=ConfigDict(extra="ignore"), **fields)
    elif isinstance(additional, Mapping):
        extra_annotation = _compile(additional, f"{path}/additionalProperties")
        model = create_model(model_name, __base__=_catchall_base(extra_annotation), **fields)
    else:
        model = create_model(model_name, __config__=ConfigDict(extra="forbid"), **fields)

    return Annotated[model, AfterValidator(_declared_fields)]


TYPE_BUILDERS = {
    "string": _build_string,
    "number": _build_number,
    "integer": _build_integer,
    "boolean": _build_boolean,
    "null": _build_null,
    "array": _build_array,
    "object": _build_object,
}


# ---------------------------------------------------------------------------
# Composite builders
# ---------------------------------------------------------------------------


def _is_null_marker(branch: Any) -> bool:
    return isinstance(branch, Mapping) and branch.get("type") == "null"


def _build_composite(schema: Mapping, path: str) -> Any:
    """Route to oneOf, anyOf or allOf, in that order of precedence."""
    if "oneOf" in schema:
        branches = schema["oneOf"]
        if not branches:
            return Any
        return _choice(
            [_compile(branch, f"{path}/oneOf/{i}") for i, branch in enumerate(branches)]
        )

    if "anyOf" in schema:
        branches = schema["anyOf"]
        if not branches:
            return Any
        return _choice(
            [
                None if _is_null_marker(branch) else _compile(branch, f"{path}/anyOf/{i}")
                for i, branch in enumerate(branches)
            ]
        )

    branches = schema["allOf"]
    if not branches:
        return Any
    for i, branch in enumerate(branches):
        if not isinstance(branch, Mapping):
            raise SchemaConversionError(
                f"Schema node must be an object, got {type(branch).__name__}", f"{path}/allOf/{i}"
            )
    return _compile(merge_all(list(branches)), f"{path}/allOf")
