import pytest

from xelement.errors import SchemaError
from xelement.value_types import (
    BOOL,
    FLOAT,
    INT,
    MIXED,
    STRING,
    ElementRefType,
    EnumType,
    StringType,
    known_type_names,
    register_value_type,
    resolve_value_type,
)


def test_simple_types_accept_only_their_own_values():
    assert STRING.accepts("x") and not STRING.accepts(5)
    assert INT.accepts(5) and not INT.accepts(True) and not INT.accepts(5.0)
    assert FLOAT.accepts(1.5) and FLOAT.accepts(2) and not FLOAT.accepts(False)
    assert BOOL.accepts(False) and not BOOL.accepts(0)
    assert MIXED.accepts(None) and MIXED.accepts([1, 2])


def test_resolve_names_and_aliases():
    assert resolve_value_type("string") is STRING
    assert resolve_value_type("Integer") is INT
    assert resolve_value_type("boolean") is BOOL
    assert resolve_value_type(FLOAT) is FLOAT


def test_enum_type_requires_string_values():
    size = resolve_value_type("enum", values=["s", "m"])
    assert isinstance(size, EnumType)
    assert size.accepts("m")
    assert not size.accepts("xl")
    assert size.to_dict() == {"type": "enum", "values": ["s", "m"]}
    with pytest.raises(SchemaError):
        resolve_value_type("enum")
    with pytest.raises(SchemaError):
        resolve_value_type("enum", values=["s", "s"])
    with pytest.raises(SchemaError):
        resolve_value_type("enum", values=["s", 1])


def test_element_type_needs_target():
    ref = resolve_value_type("element", element="icon")
    assert isinstance(ref, ElementRefType)
    assert ref.describe() == "<icon>"
    assert not ref.accepts("icon")
    with pytest.raises(SchemaError):
        resolve_value_type("element")


def test_unknown_type_fails_fast():
    with pytest.raises(SchemaError) as excinfo:
        resolve_value_type("datetime")
    assert "Known types" in excinfo.value.message
    with pytest.raises(SchemaError):
        resolve_value_type("string", values=["a"])
    with pytest.raises(SchemaError):
        resolve_value_type(42)


def test_register_value_type_extends_the_set():
    class UrlType(StringType):
        def accepts(self, value):
            return isinstance(value, str) and value.startswith("https://")

    url = UrlType(name="test-url")
    register_value_type("test-url", url)
    assert "test-url" in known_type_names()
    assert resolve_value_type("test-url") is url
    with pytest.raises(SchemaError):
        register_value_type("string", url)
    with pytest.raises(SchemaError):
        register_value_type("not-a-type", "string")


def test_only_mixed_and_element_values_are_mutable():
    assert MIXED.mutable
    assert ElementRefType(element="icon").mutable
    for value_type in (STRING, INT, FLOAT, BOOL, EnumType(values=("s", "m"))):
        assert not value_type.mutable
