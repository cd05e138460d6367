"""Template compilation and path segment decoding."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import unquote

from raml_path_match.errors import DecodeError
from raml_path_match.params import resolve
from raml_path_match.patterns import (
    boolean_capture,
    date_capture,
    escape_expr,
    expand_capture,
    integer_capture,
    malformed_escape,
    number_capture,
    segment_boundary,
    template_expr,
    trailing_slash,
)
from raml_path_match.types import Options, ParameterDefinition, ParamType, Token

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledTemplate:
    """Pattern, tokens in capture-group order and the definitions they use.

    ``pattern`` is ``None`` for the universal ``/`` prefix template.
    """

    pattern: Optional[re.Pattern[str]]
    tokens: Tuple[Token, ...]
    definitions: Dict[str, ParameterDefinition]


def decode_component(value: str) -> str:
    """Percent-decode a path segment, rejecting malformed sequences."""
    if malformed_escape.search(value):
        raise DecodeError(value)
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError as exc:
        raise DecodeError(value) from exc


def _escape(value: str) -> str:
    return escape_expr.sub(r"\\\1", value)


def _literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _capture(definition: ParameterDefinition, token: Token, prefix: str) -> str:
    enum = definition.constraints.enum
    if enum is not None:
        return "(?:" + "|".join(_escape(_literal(value)) for value in enum) + ")"

    param_type = definition.type
    if param_type is ParamType.NUMBER:
        return number_capture
    if param_type is ParamType.INTEGER:
        return integer_capture
    if param_type is ParamType.BOOLEAN:
        return boolean_capture
    if param_type is ParamType.DATE:
        return date_capture
    if token.expand:
        return expand_capture
    return f"[^{prefix or '/'}]+"


def _template_to_regex(
    template: str, parameters: Mapping[str, Any], options: Options
) -> Tuple[str, Tuple[Token, ...], Dict[str, ParameterDefinition]]:
    tokens = []
    used: Dict[str, ParameterDefinition] = {}

    def _replace(match: re.Match[str]) -> str:
        escape = match.group("escape")
        if escape:
            return "\\" + escape

        prefix = match.group("prefix")
        token = Token(
            name=decode_component(match.group("name")),
            prefix=prefix or "/",
            expand=bool(match.group("expand")),
        )
        tokens.append(token)

        definition = used.get(token.name)
        if definition is None:
            definition = resolve(token.name, parameters.get(token.name))
            used[token.name] = definition

        prefix = _escape(prefix) if prefix else ""
        group = f"({_capture(definition, token, prefix)})"
        if definition.required:
            return prefix + group
        return f"(?:{prefix}{group})?"

    route = template_expr.sub(_replace, template)
    ends_with_slash = template.endswith("/")

    # A trailing slash may only match at the end of the path, so "/test/"
    # stops at "/test" on "/test//route" in non-ending mode.
    if not options.strict:
        if ends_with_slash:
            route = route[:-2]
        route += trailing_slash

    if options.end:
        route += r"\Z"
    elif not (options.strict and ends_with_slash):
        route += segment_boundary

    return f"^{route}", tuple(tokens), used


def compile_template(
    template: str,
    parameters: Optional[Mapping[str, Any]] = None,
    options: Optional[Options] = None,
) -> CompiledTemplate:
    """Compile a URI template into an anchored pattern."""
    options = options or Options()
    parameters = parameters or {}

    if template == "/" and not options.end:
        log.debug("Template %r matches every path", template)
        return CompiledTemplate(pattern=None, tokens=(), definitions={})

    route, tokens, used = _template_to_regex(template, parameters, options)
    # ASCII digits and ASCII-only case folding
    flags = re.ASCII if options.sensitive else re.ASCII | re.IGNORECASE
    log.debug("Compiled template %r to %r", template, route)
    return CompiledTemplate(
        pattern=re.compile(route, flags), tokens=tokens, definitions=used
    )
