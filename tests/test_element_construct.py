import pytest

from xelement.element import Element, ElementType
from xelement.errors import (
    MissingAttributeError,
    TypeMismatchError,
    UnknownAttributeError,
)
from xelement.schema import ElementSchema


def _my_element() -> ElementType:
    schema = ElementSchema("my-element")
    schema.declare_attribute("a", "string", "")
    schema.declare_attribute("b", "string", "")
    return ElementType("my-element", schema)


def test_construct_with_no_values_uses_defaults():
    element = _my_element().construct({})
    assert element.get("a") == ""
    assert element.get("b") == ""


def test_construct_with_explicit_value():
    element = _my_element().construct({"b": "hi"})
    assert element.get("a") == ""
    assert element.get("b") == "hi"


def test_construct_unknown_attribute():
    with pytest.raises(UnknownAttributeError) as excinfo:
        _my_element().construct({"c": "x"})
    assert excinfo.value.attribute == "c"
    assert excinfo.value.code == "XEL-2001"


def test_construct_type_mismatch():
    with pytest.raises(TypeMismatchError) as excinfo:
        _my_element().construct({"a": 5})
    assert excinfo.value.element == "my-element"


def test_unknown_names_are_reported_before_type_mismatches():
    with pytest.raises(UnknownAttributeError):
        _my_element().construct({"a": 5, "c": "x"})


def test_attribute_set_matches_schema_exactly():
    element = _my_element()(a="x")
    assert set(element.attributes()) == {"a", "b"}
    assert isinstance(element, Element)
    assert element.name == "my-element"


def test_required_attribute_must_be_supplied():
    schema = ElementSchema("labelled")
    schema.declare_attribute("label", "string", required=True)
    etype = ElementType("labelled", schema)
    with pytest.raises(MissingAttributeError) as excinfo:
        etype.construct()
    assert "required attribute 'label'" in excinfo.value.message
    assert etype.construct(label="ok").get("label") == "ok"


def test_nullable_attribute_defaults_to_none():
    schema = ElementSchema("card")
    schema.declare_attribute("title", "string")
    etype = ElementType("card", schema)
    assert etype.construct().get("title") is None
    assert etype.construct(title=None).get("title") is None


def test_mutable_defaults_are_not_shared_between_instances():
    schema = ElementSchema("list-view")
    schema.declare_attribute("items", "mixed", [])
    etype = ElementType("list-view", schema)
    first = etype.construct()
    second = etype.construct()
    first.get("items").append(1)
    assert second.get("items") == []
    assert etype.construct().get("items") == []


def test_keyword_names_map_to_hyphenated_attributes():
    schema = ElementSchema("row")
    schema.declare_attribute("data-id", "int", 0)
    etype = ElementType("row", schema)
    assert etype(data_id=7).get("data-id") == 7


def test_construct_finalizes_schema():
    etype = _my_element()
    assert not etype.schema.finalized
    etype.construct()
    assert etype.schema.finalized


def test_element_typed_attribute():
    icon_schema = ElementSchema("icon")
    icon_schema.declare_attribute("glyph", "string", "*")
    icon = ElementType("icon", icon_schema)
    other = ElementType("badge", ElementSchema("badge"))

    button_schema = ElementSchema("button")
    button_schema.declare_attribute("icon", "element", element="icon")
    button = ElementType("button", button_schema)

    built = button.construct(icon=icon.construct(glyph="+"))
    assert built.get("icon").get("glyph") == "+"
    with pytest.raises(TypeMismatchError):
        button.construct(icon=other.construct())
    with pytest.raises(TypeMismatchError):
        button.construct(icon="icon")


def test_equality_and_repr():
    etype = _my_element()
    assert etype(b="hi") == etype(b="hi")
    assert etype(b="hi") != etype(b="ho")
    assert repr(etype(b="hi")) == "<my-element a='' b='hi' />"


def test_element_default_is_copied_per_instance():
    icon_schema = ElementSchema("icon")
    icon_schema.declare_attribute("glyph", "string", "*")
    icon = ElementType("icon", icon_schema)
    default_icon = icon.construct()

    button_schema = ElementSchema("button")
    button_schema.declare_attribute("icon", "element", default_icon, element="icon")
    button_schema.declare_attribute("extra", "mixed", icon.construct(glyph="?"))
    button = ElementType("button", button_schema)

    first = button.construct()
    second = button.construct()
    assert first.get("icon") == default_icon
    assert first.get("icon") is not second.get("icon")
    assert first.get("icon").element_type is icon
    assert first.get("extra").get("glyph") == "?"

    first.get("icon").set("glyph", "+")
    assert second.get("icon").get("glyph") == "*"
    assert button.construct().get("icon").get("glyph") == "*"
    assert default_icon.get("glyph") == "*"


def test_same_attribute_in_mapping_and_keyword_is_rejected():
    schema = ElementSchema("row")
    schema.declare_attribute("data-id", "int", 0)
    etype = ElementType("row", schema)
    with pytest.raises(TypeMismatchError) as excinfo:
        etype.construct({"data-id": 1}, data_id=2)
    assert excinfo.value.attribute == "data-id"
