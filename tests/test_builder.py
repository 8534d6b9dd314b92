import pytest

from xelement.builder import build_element
from xelement.errors import (
    ParseError,
    TypeMismatchError,
    UnknownAttributeError,
    UnknownElementError,
)
from xelement.parser import parse_element_source


def test_build_scenario(registry):
    empty = build_element("<my-element />", registry)
    assert empty.get("a") == "" and empty.get("b") == ""

    hi = build_element('<my-element b="hi" />', registry)
    assert hi.get("a") == "" and hi.get("b") == "hi"

    with pytest.raises(UnknownAttributeError):
        build_element('<my-element c="x" />', registry)
    with pytest.raises(TypeMismatchError):
        build_element("<my-element a={5} />", registry)


def test_errors_point_at_the_attribute(registry):
    source = '<my-element\n  b="ok"\n  a={5} />'
    with pytest.raises(TypeMismatchError) as excinfo:
        build_element(source, registry)
    assert (excinfo.value.line, excinfo.value.column) == (3, 3)
    assert excinfo.value.diagnostics[0]["line"] == 3


def test_unknown_element_points_at_tag(registry):
    with pytest.raises(UnknownElementError) as excinfo:
        build_element("<nope />", registry)
    assert excinfo.value.line == 1


def test_nested_elements_are_built_first(registry):
    registry.define("icon", {"glyph": {"type": "string", "default": "*"}})
    registry.define(
        "button",
        {
            "icon": {"type": "element", "element": "icon"},
            "disabled": {"type": "bool", "default": False},
        },
    )
    button = build_element('<button disabled icon={<icon glyph="+" />} />', registry)
    assert button.get("disabled") is True
    assert button.get("icon").get("glyph") == "+"


def test_build_accepts_parsed_nodes(registry):
    node = parse_element_source('<my-element a="x" />')
    assert build_element(node, registry).get("a") == "x"


def test_build_propagates_parse_errors(registry):
    with pytest.raises(ParseError):
        build_element("<my-element>", registry)
