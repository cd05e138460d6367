"""Coerce captured path parameters to their declared types."""

from email.utils import parsedate_to_datetime
from typing import Any, Dict, Mapping, Optional

from raml_path_match.types import ParameterDefinition, ParamType


def _to_boolean(value: str) -> Any:
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return value


def _to_date(value: str) -> Any:
    try:
        return parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return value


def convert(value: Optional[str], param_type: ParamType) -> Any:
    """Best-effort conversion, returning the original value on failure."""
    if value is None or not isinstance(value, str):
        return value
    try:
        if param_type is ParamType.NUMBER:
            return float(value)
        if param_type is ParamType.INTEGER:
            return int(value)
    except ValueError:
        return value
    if param_type is ParamType.BOOLEAN:
        return _to_boolean(value)
    if param_type is ParamType.DATE:
        return _to_date(value)
    return value


def sanitize(
    params: Mapping[str, Optional[str]],
    definitions: Mapping[str, ParameterDefinition],
) -> Dict[str, Any]:
    """Coerce every parameter that has a definition."""
    sanitized: Dict[str, Any] = {}
    for name, value in params.items():
        definition = definitions.get(name)
        if definition is None:
            sanitized[name] = value
            continue
        sanitized[name] = convert(value, definition.type)
    return sanitized
