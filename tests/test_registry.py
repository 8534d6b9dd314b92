import pytest

from xelement.config import XElementConfig
from xelement.element import ElementType
from xelement.errors import SchemaError, UnknownElementError
from xelement.registry import ElementRegistry


def test_define_registers_finalized_type(registry):
    etype = registry.get("my-element")
    assert isinstance(etype, ElementType)
    assert etype.schema.finalized
    assert "my-element" in registry
    assert registry.list_names() == ["my-element"]
    assert len(registry) == 1


def test_define_accepts_plain_type_names():
    registry = ElementRegistry()
    etype = registry.define("card", {"title": "string"})
    assert etype.construct().get("title") is None


def test_duplicate_registration_is_schema_error(registry):
    with pytest.raises(SchemaError):
        registry.define("my-element", {})


def test_unknown_element(registry):
    with pytest.raises(UnknownElementError) as excinfo:
        registry.get("nope")
    assert excinfo.value.code == "XEL-3001"


def test_unregister(registry):
    registry.unregister("my-element")
    registry.unregister("my-element")
    assert "my-element" not in registry


def test_define_with_extends_and_behaviors(registry):
    def shout(element):
        return element.get("a").upper()

    etype = registry.define(
        "loud-element",
        {"volume": {"type": "int", "default": 11}},
        {"shout": shout},
        extends=["my-element"],
        description="louder",
    )
    assert etype.schema.names() == ["a", "b", "volume"]
    assert etype.construct(a="hey").call("shout") == "HEY"
    assert etype.to_dict()["description"] == "louder"


def test_define_rejects_malformed_attribute_specs():
    registry = ElementRegistry()
    with pytest.raises(SchemaError):
        registry.define("bad", {"a": {"default": ""}})
    with pytest.raises(SchemaError):
        registry.define("bad", {"a": {"type": "string", "defualt": ""}})
    assert "bad" not in registry


def test_unresolved_references():
    registry = ElementRegistry()
    registry.define("button", {"icon": {"type": "element", "element": "icon"}})
    assert registry.unresolved_references() == [("button", "icon", "icon")]
    registry.define("icon", {})
    assert registry.unresolved_references() == []


def test_registry_config_flows_to_types():
    registry = ElementRegistry(XElementConfig(external_writes=False))
    etype = registry.define("card", {"title": "string"})
    assert etype.config.external_writes is False
