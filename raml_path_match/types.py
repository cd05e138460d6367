from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Union


class ParamType(str, Enum):
    """Primitive RAML parameter types."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    DATE = "date"

    @classmethod
    def parse(cls, value: Any) -> "ParamType":
        """Return the matching type, falling back to string."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.STRING
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.STRING


@dataclass(frozen=True)
class Constraints:
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    enum: Optional[Tuple[Any, ...]] = None


@dataclass(frozen=True)
class ParameterDefinition:
    name: str
    type: ParamType = ParamType.STRING
    required: bool = True
    constraints: Constraints = field(default_factory=Constraints)


@dataclass(frozen=True)
class Token:
    """A parameter reference found in a template."""

    name: str
    prefix: str = "/"
    expand: bool = False


@dataclass(frozen=True)
class Options:
    """Matching options, fixed at compile time."""

    end: bool = True
    strict: bool = False
    sensitive: bool = False

    @classmethod
    def parse(cls, options: Union[None, "Options", Mapping[str, Any]]) -> "Options":
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options

        known = {f.name for f in fields(cls)}
        unknown = [key for key in options if key not in known]
        if unknown:
            raise TypeError(
                f"TypeError: options got unexpected keys: {', '.join(unknown)}"
            )
        return cls(
            **{key: bool(value) for key, value in options.items() if value is not None}
        )


@dataclass(frozen=True)
class MatchResult:
    path: str
    params: Dict[str, Any]


@dataclass(frozen=True)
class ValidationResult:
    conforms: bool
    errors: Dict[str, Tuple[str, ...]] = field(default_factory=dict)
