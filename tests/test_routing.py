"""Test template compilation."""

import re

import pytest

from raml_path_match.errors import DecodeError
from raml_path_match.routing import (
    _capture,
    _template_to_regex,
    compile_template,
    decode_component,
)
from raml_path_match.types import (
    Constraints,
    Options,
    ParameterDefinition,
    ParamType,
    Token,
)


def test_template_to_regex_literal():
    """Test that a template without parameters is escaped literally."""
    route, tokens, used = _template_to_regex("/a.b", {}, Options())
    assert route == r"^\/a\.b(?:\/(?=\Z))?\Z"
    assert tokens == ()
    assert used == {}


def test_template_to_regex_tokens():
    """Test that tokens are recorded in capture-group order."""
    route, tokens, used = _template_to_regex(
        "/{id}.{format}/{+rest}", {"id": {"type": "integer"}}, Options()
    )
    assert tokens == (
        Token(name="id", prefix="/"),
        Token(name="format", prefix="."),
        Token(name="rest", prefix="/", expand=True),
    )
    assert route == (
        r"^\/([-+]?\d+)\.([^\.]+)\/(.+?)(?:\/(?=\Z))?\Z"
    )
    assert used["id"].type is ParamType.INTEGER
    assert used["format"] == ParameterDefinition(name="format")


def test_template_to_regex_no_prefix():
    route, tokens, _ = _template_to_regex("/test{route}", {}, Options())
    assert tokens == (Token(name="route", prefix="/"),)
    assert route == r"^\/test([^/]+)(?:\/(?=\Z))?\Z"


def test_template_to_regex_optional():
    """Test that an optional parameter's prefix is part of its optional group."""
    route, _, _ = _template_to_regex(
        "/{route}", {"route": {"required": False}}, Options()
    )
    assert route == r"^(?:\/([^\/]+))?(?:\/(?=\Z))?\Z"


def test_template_to_regex_decodes_name():
    _, tokens, used = _template_to_regex("/{caf%C3%A9}", {}, Options())
    assert tokens[0].name == "café"
    assert "café" in used


def test_template_to_regex_duplicate_names():
    """Test that repeated names share the first resolved definition."""
    _, tokens, used = _template_to_regex(
        "/{id}/{id}", {"id": {"type": "integer"}}, Options()
    )
    assert [t.name for t in tokens] == ["id", "id"]
    assert list(used) == ["id"]


@pytest.mark.parametrize(
    "template,options,expected",
    [
        ("/test/", Options(), r"^\/test(?:\/(?=\Z))?\Z"),
        ("/test/", Options(strict=True), r"^\/test\/\Z"),
        ("/test", Options(end=False), r"^\/test(?:\/(?=\Z))?(?=\/|\Z)"),
        ("/test/", Options(end=False), r"^\/test(?:\/(?=\Z))?(?=\/|\Z)"),
        ("/test/", Options(end=False, strict=True), r"^\/test\/"),
        ("/test", Options(end=False, strict=True), r"^\/test(?=\/|\Z)"),
    ],
)
def test_template_to_regex_trailing(template, options, expected):
    """Test trailing slash and termination handling."""
    route, _, _ = _template_to_regex(template, {}, options)
    assert route == expected


def test_capture_enum():
    """Test that enum values become an escaped alternation."""
    definition = ParameterDefinition(
        name="ext", constraints=Constraints(enum=("json", "tar.gz"))
    )
    assert _capture(definition, Token("ext"), r"\/") == r"(?:json|tar\.gz)"


def test_capture_enum_literals():
    definition = ParameterDefinition(
        name="flag",
        type=ParamType.BOOLEAN,
        constraints=Constraints(enum=(True, 2.0, 3.5)),
    )
    assert _capture(definition, Token("flag"), "") == r"(?:true|2|3\.5)"


@pytest.mark.parametrize(
    "param_type,value,matches",
    [
        (ParamType.NUMBER, "-1.5", True),
        (ParamType.NUMBER, "1.", False),
        (ParamType.INTEGER, "+10", True),
        (ParamType.INTEGER, "10.5", False),
        (ParamType.BOOLEAN, "false", True),
        (ParamType.BOOLEAN, "yes", False),
        (ParamType.DATE, "Sun, 06 Nov 1994 08:49:37 GMT", True),
        (ParamType.STRING, "a/b", False),
    ],
)
def test_capture_types(param_type, value, matches):
    definition = ParameterDefinition(name="p", type=param_type)
    capture = _capture(definition, Token("p"), r"\/")
    assert bool(re.fullmatch(capture, value)) is matches


def test_capture_expand_only_for_strings():
    definition = ParameterDefinition(name="p", type=ParamType.INTEGER)
    token = Token("p", expand=True)
    assert _capture(definition, token, r"\/") == r"[-+]?\d+"
    assert _capture(ParameterDefinition(name="p"), token, r"\/") == ".+?"


def test_compile_template_flags():
    """Test that matching is case insensitive unless sensitive is set."""
    insensitive = compile_template("/test", {}, Options())
    sensitive = compile_template("/test", {}, Options(sensitive=True))
    assert insensitive.pattern.match("/TEST")
    assert not sensitive.pattern.match("/TEST")


def test_compile_template_universal():
    """Test that "/" in non-ending mode needs no pattern."""
    compiled = compile_template("/", None, Options(end=False))
    assert compiled.pattern is None
    assert compiled.tokens == ()


def test_compile_template_defaults():
    compiled = compile_template("/")
    assert compiled.pattern.match("/")
    assert compiled.pattern.match("")
    assert not compiled.pattern.match("/route")


def test_decode_component():
    assert decode_component("caf%C3%A9") == "café"
    assert decode_component("a+b%20c") == "a+b c"


@pytest.mark.parametrize("value", ["%", "%E0%A4%A", "%zz", "%C3"])
def test_decode_component_malformed(value):
    with pytest.raises(DecodeError) as exc_info:
        decode_component(value)
    assert exc_info.value.value == value
    assert isinstance(exc_info.value, ValueError)


def test_compile_template_ascii():
    """Test that digits and case folding are limited to ASCII."""
    compiled = compile_template("/test/{id}", {"id": {"type": "integer"}}, Options())
    assert compiled.pattern.flags & re.ASCII
    assert not compiled.pattern.match("/teſt/1")
    assert not compiled.pattern.match("/test/١")
    assert compiled.pattern.match("/TEST/1")
