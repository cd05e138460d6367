"""Parameter definition resolution.

Definitions come from an API model: plain mappings, plain objects, or
accessor objects whose declared values are read with ``.value()``.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Dict, Optional

from raml_path_match.types import Constraints, ParameterDefinition, ParamType

# (RAML key, snake_case key, Constraints field)
CONSTRAINT_KEYS = (
    ("pattern", "pattern", "pattern"),
    ("minLength", "min_length", "min_length"),
    ("maxLength", "max_length", "max_length"),
    ("minimum", "minimum", "minimum"),
    ("maximum", "maximum", "maximum"),
    ("enum", "enum", "enum"),
)


def read_value(value: Any) -> Any:
    """Return the declared value behind an accessor, or the value itself."""
    reader = getattr(value, "value", None)
    if callable(reader):
        return reader()
    return value


def _field(source: Any, key: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        raw = source.get(key)
    else:
        raw = getattr(source, key, None)
    return read_value(raw)


def _first_field(source: Any, *keys: str) -> Any:
    for key in keys:
        value = _field(source, key)
        if value is not None:
            return value
    return None


def _constraints(definition: Any) -> Constraints:
    nested = _field(definition, "constraints")
    values: Dict[str, Any] = {}
    for raml_key, snake_key, attr in CONSTRAINT_KEYS:
        value = _first_field(nested, raml_key, snake_key)
        if value is None:
            value = _first_field(definition, raml_key, snake_key)
        if value is None:
            continue
        if attr == "enum":
            value = tuple(read_value(item) for item in value)
        values[attr] = value
    return Constraints(**values)


def resolve(name: str, definition: Optional[Any] = None) -> ParameterDefinition:
    """Normalize a parameter definition, applying defaults."""
    if definition is None:
        return ParameterDefinition(name=name)
    if isinstance(definition, ParameterDefinition):
        return definition

    required = _field(definition, "required")
    return ParameterDefinition(
        name=name,
        type=ParamType.parse(_field(definition, "type")),
        required=True if required is None else bool(required),
        constraints=_constraints(definition),
    )


def normalize_parameters(parameters: Optional[Any]) -> Dict[str, Any]:
    """Return a name to definition mapping from a mapping or a list."""
    if parameters is None:
        return {}
    if isinstance(parameters, Mapping):
        return dict(parameters)
    if not isinstance(parameters, Iterable):
        raise TypeError(
            f"Parameters must be a mapping or a list, got {type(parameters).__name__}"
        )

    named: Dict[str, Any] = {}
    for definition in parameters:
        name = _field(definition, "name")
        if not name:
            raise ValueError(f"Parameter definition has no name: {definition!r}")
        named[str(name)] = definition
    return named
