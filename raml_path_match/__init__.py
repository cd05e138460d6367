"""raml-path-match: match request paths against RAML URI templates."""

from raml_path_match.errors import DecodeError, PathMatchError
from raml_path_match.logs import configure_logging
from raml_path_match.matcher import PathMatcher, compile, factory
from raml_path_match.types import (
    Constraints,
    MatchResult,
    Options,
    ParameterDefinition,
    ParamType,
    Token,
    ValidationResult,
)

__version__ = "1.0.0"

__all__ = [
    "Constraints",
    "DecodeError",
    "MatchResult",
    "Options",
    "ParamType",
    "ParameterDefinition",
    "PathMatchError",
    "PathMatcher",
    "Token",
    "ValidationResult",
    "compile",
    "configure_logging",
    "factory",
]
