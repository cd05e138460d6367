"""Compiled path matchers.

Usage::

    match = compile("/{id}", [{"name": "id", "type": "integer"}])
    match("/10")   # MatchResult(path="/10", params={"id": 10})
    match("/abc")  # None

A matcher is immutable. ``update`` returns a matcher for a merged set of
parameter definitions, or the very same matcher when the merge leaves every
parameter of the template unchanged.
"""

import logging
import re
from dataclasses import dataclass, field
from functools import partial
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from raml_path_match.params import normalize_parameters, resolve
from raml_path_match.routing import compile_template, decode_component
from raml_path_match.sanitize import sanitize
from raml_path_match.types import (
    MatchResult,
    Options,
    ParameterDefinition,
    Token,
    ValidationResult,
)
from raml_path_match.validate import (
    AsyncCheck,
    as_async,
    check_async,
    validate,
    validate_async,
)

log = logging.getLogger(__name__)

Sanitizer = Callable[[Mapping[str, Any], Mapping[str, ParameterDefinition]], Dict]
Validator = Callable[
    [Mapping[str, Any], Mapping[str, ParameterDefinition]], ValidationResult
]


@dataclass(frozen=True, eq=False)
class PathMatcher:
    """Reusable matcher for a single URI template."""

    template: str
    parameters: Mapping[str, Any]
    options: Options
    pattern: Optional[re.Pattern[str]]
    tokens: Tuple[Token, ...]
    definitions: Mapping[str, ParameterDefinition]
    sanitizer: Sanitizer = field(default=sanitize, repr=False)
    validator: Validator = field(default=validate, repr=False)
    async_validator: AsyncCheck = field(default=check_async, repr=False)

    def __call__(self, path: str) -> Optional[MatchResult]:
        return self.match(path)

    def _extract(self, path: str) -> Optional[Tuple[str, Dict[str, Any]]]:
        if self.pattern is None:
            return "", {}

        match = self.pattern.match(path)
        if not match:
            log.debug("Path %r does not match %r", path, self.template)
            return None

        params: Dict[str, Optional[str]] = {}
        for token, value in zip(self.tokens, match.groups()):
            if token.name in params:
                continue
            params[token.name] = None if value is None else decode_component(value)

        return match.group(0), self.sanitizer(params, self.definitions)

    def _finish(
        self, path: str, matched: str, params: Dict[str, Any], result: ValidationResult
    ) -> Optional[MatchResult]:
        if not result.conforms:
            log.debug(
                "Path %r rejected by %r: %s", path, self.template, result.errors
            )
            return None
        return MatchResult(path=matched, params=params)

    def match(self, path: str) -> Optional[MatchResult]:
        """Match ``path``, returning ``None`` when it does not conform.

        Raises ``DecodeError`` when a captured segment is not valid
        percent-encoding.
        """
        extracted = self._extract(path)
        if extracted is None:
            return None
        matched, params = extracted
        return self._finish(
            path, matched, params, self.validator(params, self.definitions)
        )

    async def match_async(self, path: str) -> Optional[MatchResult]:
        """Like ``match``, validating parameters concurrently.

        An exception raised by the async validator propagates unwrapped.
        """
        extracted = self._extract(path)
        if extracted is None:
            return None
        matched, params = extracted
        result = await validate_async(params, self.definitions, self.async_validator)
        return self._finish(path, matched, params, result)

    def update(self, parameters: Any) -> "PathMatcher":
        """Return a matcher using ``parameters`` merged over the current ones."""
        merged = {**self.parameters, **normalize_parameters(parameters)}
        resolved = {
            token.name: resolve(token.name, merged.get(token.name))
            for token in self.tokens
        }
        if resolved == dict(self.definitions):
            log.debug("Update leaves %r unchanged", self.template)
            return self

        return compile(
            self.template,
            merged,
            self.options,
            sanitizer=self.sanitizer,
            validator=self.validator,
            async_validator=self.async_validator,
        )


def compile(
    template: str,
    parameters: Any = None,
    options: Any = None,
    *,
    sanitizer: Optional[Sanitizer] = None,
    validator: Optional[Validator] = None,
    async_validator: Optional[AsyncCheck] = None,
) -> PathMatcher:
    """Compile ``template`` into a matcher.

    ``parameters`` is a mapping of name to definition or a list of named
    definitions. ``options`` is an ``Options`` instance or a mapping with
    ``end``, ``strict`` and ``sensitive`` keys.

    Without an ``async_validator``, ``match_async`` checks each parameter
    with ``validator``, so both paths agree.
    """
    if async_validator is None:
        async_validator = as_async(validator) if validator else check_async
    options = Options.parse(options)
    parameters = normalize_parameters(parameters)
    compiled = compile_template(template, parameters, options)
    return PathMatcher(
        template=template,
        parameters=MappingProxyType(parameters),
        options=options,
        pattern=compiled.pattern,
        tokens=compiled.tokens,
        definitions=MappingProxyType(compiled.definitions),
        sanitizer=sanitizer or sanitize,
        validator=validator or validate,
        async_validator=async_validator,
    )


def factory(options: Any = None, **kwargs: Any) -> Callable[..., PathMatcher]:
    """Bind options once and return a ``(template, parameters)`` compiler."""
    return partial(compile, options=Options.parse(options), **kwargs)
