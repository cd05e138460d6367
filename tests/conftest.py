import pytest


class Accessor:
    """API-model field that is read with ``.value()``."""

    def __init__(self, value):
        self._value = value

    def value(self):
        return self._value


class ModelParameter:
    """API-model parameter exposing accessor fields."""

    def __init__(self, name, **fields):
        self.name = Accessor(name)
        for key, value in fields.items():
            setattr(self, key, Accessor(value))


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def model_parameter():
    """Factory for accessor-style parameter definitions."""
    return ModelParameter


@pytest.fixture
def accessor():
    return Accessor
