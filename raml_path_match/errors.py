"""Path matching errors."""


class PathMatchError(Exception):
    """Base class for raml_path_match errors."""


class DecodeError(PathMatchError, ValueError):
    """A path segment holds a malformed percent-encoded sequence."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Malformed percent-encoding in {value!r}")
