"""Check sanitized path parameters against their declared constraints.

``validate`` checks every parameter in turn. ``validate_async`` hands each
parameter to an asynchronous check and runs them concurrently in an anyio
task group, joining all of them before deciding.
"""

import logging
import math
import re
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Tuple

import anyio

from raml_path_match.types import ParameterDefinition, ParamType, ValidationResult

log = logging.getLogger(__name__)

AsyncCheck = Callable[[str, Any, ParameterDefinition], Awaitable[ValidationResult]]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_type(value: Any, param_type: ParamType) -> bool:
    if param_type is ParamType.NUMBER:
        return _is_number(value)
    if param_type is ParamType.INTEGER:
        return isinstance(value, int) and not isinstance(value, bool)
    if param_type is ParamType.BOOLEAN:
        return isinstance(value, bool)
    if param_type is ParamType.DATE:
        return isinstance(value, datetime)
    return isinstance(value, str)


def check(value: Any, definition: ParameterDefinition) -> Tuple[str, ...]:
    """Return the names of the rules ``value`` breaks."""
    if value is None:
        return ("required",) if definition.required else ()

    if not _is_type(value, definition.type):
        return ("type",)

    failed: List[str] = []
    constraints = definition.constraints
    if isinstance(value, str):
        if constraints.min_length is not None and len(value) < constraints.min_length:
            failed.append("minLength")
        if constraints.max_length is not None and len(value) > constraints.max_length:
            failed.append("maxLength")
        if constraints.pattern is not None and not re.search(
            constraints.pattern, value
        ):
            failed.append("pattern")
    if _is_number(value):
        if constraints.minimum is not None and value < constraints.minimum:
            failed.append("minimum")
        if constraints.maximum is not None and value > constraints.maximum:
            failed.append("maximum")
    if constraints.enum is not None and value not in constraints.enum:
        failed.append("enum")
    return tuple(failed)


def _result(errors: Dict[str, Tuple[str, ...]]) -> ValidationResult:
    errors = {name: rules for name, rules in errors.items() if rules}
    return ValidationResult(conforms=not errors, errors=errors)


def validate(
    params: Mapping[str, Any], definitions: Mapping[str, ParameterDefinition]
) -> ValidationResult:
    """Validate every parameter that has a definition."""
    errors = {
        name: check(value, definitions[name])
        for name, value in params.items()
        if name in definitions
    }
    return _result(errors)


async def check_async(
    name: str, value: Any, definition: ParameterDefinition
) -> ValidationResult:
    """Default asynchronous check, same rules as ``check``."""
    return _result({name: check(value, definition)})


async def validate_async(
    params: Mapping[str, Any],
    definitions: Mapping[str, ParameterDefinition],
    checker: Optional[AsyncCheck] = None,
) -> ValidationResult:
    """Validate all parameters concurrently and join the verdicts.

    An exception raised by a check is re-raised as is once every check has
    finished; the first one to be raised wins.
    """
    checker = checker or check_async
    verdicts: Dict[str, ValidationResult] = {}
    raised: List[Exception] = []

    async def _run(name: str, value: Any, definition: ParameterDefinition) -> None:
        try:
            verdicts[name] = await checker(name, value, definition)
        except Exception as exc:
            raised.append(exc)

    async with anyio.create_task_group() as tg:
        for name, value in params.items():
            definition = definitions.get(name)
            if definition is None:
                continue
            tg.start_soon(_run, name, value, definition)

    if raised:
        raise raised[0]

    errors: Dict[str, Tuple[str, ...]] = {}
    for name, verdict in verdicts.items():
        if not verdict.conforms:
            errors[name] = verdict.errors.get(name) or ("rejected",)
    log.debug("Validated %d parameters concurrently", len(verdicts))
    return _result(errors)


def as_async(validator: Callable[..., ValidationResult]) -> AsyncCheck:
    """Wrap a synchronous ``validate``-style validator as a per-parameter check."""

    async def _check(
        name: str, value: Any, definition: ParameterDefinition
    ) -> ValidationResult:
        return validator({name: value}, {name: definition})

    return _check
