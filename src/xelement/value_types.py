"""
Attribute value types.

The supported set is small and closed by default: string, int, float, bool,
enum (of strings), element (an instance of a named element type) and mixed.
New simple types can be added with `register_value_type`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from .errors import SchemaError


@dataclass(frozen=True)
class ValueType:
    name: str

    def accepts(self, value: Any) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    def describe(self) -> str:
        return self.name

    @property
    def mutable(self) -> bool:
        """Whether values can change in place; defaults of mutable types are copied."""
        return False

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.name}


@dataclass(frozen=True)
class StringType(ValueType):
    name: str = "string"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str)


@dataclass(frozen=True)
class IntType(ValueType):
    name: str = "int"

    def accepts(self, value: Any) -> bool:
        # bool is an int subclass but never a valid int attribute value.
        return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class FloatType(ValueType):
    name: str = "float"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class BoolType(ValueType):
    name: str = "bool"

    def accepts(self, value: Any) -> bool:
        return isinstance(value, bool)


@dataclass(frozen=True)
class MixedType(ValueType):
    name: str = "mixed"

    def accepts(self, value: Any) -> bool:
        return True

    @property
    def mutable(self) -> bool:
        return True


@dataclass(frozen=True)
class EnumType(ValueType):
    name: str = "enum"
    values: Tuple[str, ...] = ()

    def accepts(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.values

    def describe(self) -> str:
        return "enum {" + ", ".join(repr(v) for v in self.values) + "}"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.name, "values": list(self.values)}


@dataclass(frozen=True)
class ElementRefType(ValueType):
    """An attribute whose value is an instance of another element type."""

    name: str = "element"
    element: str = ""

    def accepts(self, value: Any) -> bool:
        from .element import Element

        return isinstance(value, Element) and value.element_type.name == self.element

    def describe(self) -> str:
        return f"<{self.element}>"

    @property
    def mutable(self) -> bool:
        return True

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.name, "element": self.element}


STRING = StringType()
INT = IntType()
FLOAT = FloatType()
BOOL = BoolType()
MIXED = MixedType()

_SIMPLE_TYPES: Dict[str, ValueType] = {
    "string": STRING,
    "str": STRING,
    "int": INT,
    "integer": INT,
    "float": FLOAT,
    "bool": BOOL,
    "boolean": BOOL,
    "mixed": MIXED,
}

_PARAMETRIC_TYPES: Dict[str, Callable[..., ValueType]] = {}


def _enum_type(*, values: Optional[Iterable[str]] = None, element: Optional[str] = None) -> ValueType:
    if element is not None:
        raise SchemaError("enum types do not take an element target")
    members = tuple(values or ())
    if not members:
        raise SchemaError("enum types need at least one value")
    if any(not isinstance(m, str) for m in members):
        raise SchemaError("enum values must be strings")
    if len(set(members)) != len(members):
        raise SchemaError("enum values must be unique")
    return EnumType(values=members)


def _element_type(*, values: Optional[Iterable[str]] = None, element: Optional[str] = None) -> ValueType:
    if values is not None:
        raise SchemaError("element types do not take enum values")
    if not element or not isinstance(element, str):
        raise SchemaError("element types need the name of the target element")
    return ElementRefType(element=element)


_PARAMETRIC_TYPES["enum"] = _enum_type
_PARAMETRIC_TYPES["element"] = _element_type


def register_value_type(name: str, value_type: ValueType) -> None:
    """Make a simple (non-parametric) value type available by name.

    Types whose values can be changed in place should override `mutable`
    so that defaults are copied per instance.
    """
    if not isinstance(value_type, ValueType):
        raise SchemaError(f"Value type '{name}' must be a ValueType instance")
    if name in _SIMPLE_TYPES or name in _PARAMETRIC_TYPES:
        raise SchemaError(f"Value type '{name}' is already registered")
    _SIMPLE_TYPES[name] = value_type


def known_type_names() -> list[str]:
    return sorted(set(_SIMPLE_TYPES) | set(_PARAMETRIC_TYPES))


def resolve_value_type(
    spec: ValueType | str,
    *,
    values: Optional[Iterable[str]] = None,
    element: Optional[str] = None,
) -> ValueType:
    """
    Turn a type spec into a ValueType.

    `spec` is either a ValueType instance or one of the registered names.
    Enum types take `values`, element types take `element`.
    """

    if isinstance(spec, ValueType):
        if values is not None or element is not None:
            raise SchemaError(f"Type '{spec.name}' is already resolved; values/element are not allowed")
        return spec
    if not isinstance(spec, str):
        raise SchemaError(f"Unsupported attribute type {spec!r}")
    key = spec.strip().lower()
    if key in _PARAMETRIC_TYPES:
        return _PARAMETRIC_TYPES[key](values=values, element=element)
    if key in _SIMPLE_TYPES:
        if values is not None or element is not None:
            raise SchemaError(f"Type '{key}' does not take values or an element target")
        return _SIMPLE_TYPES[key]
    raise SchemaError(
        f"Unsupported attribute type '{spec}'. Known types: {', '.join(known_type_names())}"
    )
