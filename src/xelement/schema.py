"""
Attribute schemas for element types.

An ElementSchema collects AttributeSchema declarations for one element type.
Once finalized it is immutable and shared by every instance of that type.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .errors import SchemaError, TypeMismatchError, UnknownAttributeError
from .value_types import MixedType, ValueType, resolve_value_type

log = logging.getLogger(__name__)

_ATTRIBUTE_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_:\-]*$")


class _NoDefault:
    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


def _copy_default(value_type: ValueType, default: Any) -> Any:
    # Only mutable types can be changed through a shared default.
    if value_type.mutable:
        return copy.deepcopy(default)
    return default


@dataclass(frozen=True)
class AttributeSchema:
    name: str
    value_type: ValueType
    default: Any = None
    has_default: bool = False
    required: bool = False

    @property
    def nullable(self) -> bool:
        """Attributes with neither a default nor `required` hold None until set."""
        return not self.required and not self.has_default and not isinstance(self.value_type, MixedType)

    def accepts(self, value: Any) -> bool:
        if value is None and self.nullable:
            return True
        return self.value_type.accepts(value)

    def initial_value(self) -> Any:
        if not self.has_default:
            return None
        return _copy_default(self.value_type, self.default)

    def to_dict(self) -> dict[str, Any]:
        data = self.value_type.to_dict()
        data["name"] = self.name
        if self.has_default:
            data["default"] = self.default
        if self.required:
            data["required"] = True
        if self.nullable:
            data["nullable"] = True
        return data


class ElementSchema:
    """
    Ordered attribute declarations for one element type.

    Usage:
        schema = ElementSchema("my-element")
        schema.declare_attribute("a", "string", "")
        schema.declare_attribute("size", "enum", "m", values=["s", "m", "l"])
        schema.finalize()
    """

    def __init__(self, element: str) -> None:
        self.element = element
        self._attributes: Dict[str, AttributeSchema] = {}
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def declare_attribute(
        self,
        name: str,
        value_type: ValueType | str,
        default: Any = NO_DEFAULT,
        *,
        required: bool = False,
        values: Optional[Iterable[str]] = None,
        element: Optional[str] = None,
    ) -> AttributeSchema:
        self._ensure_open(name)
        if not isinstance(name, str) or not _ATTRIBUTE_NAME_RE.match(name):
            raise SchemaError(
                f"'{name}' is not a valid attribute name on <{self.element}>",
                element=self.element,
                attribute=str(name),
            )
        if name in self._attributes:
            raise SchemaError(
                f"Attribute '{name}' is already declared on <{self.element}>",
                element=self.element,
                attribute=name,
            )
        try:
            resolved = resolve_value_type(value_type, values=values, element=element)
        except SchemaError as exc:
            raise SchemaError(
                f"Attribute '{name}' on <{self.element}>: {exc.message}",
                element=self.element,
                attribute=name,
            ) from exc

        has_default = default is not NO_DEFAULT
        if has_default and required:
            raise SchemaError(
                f"Attribute '{name}' on <{self.element}> cannot be required and have a default",
                element=self.element,
                attribute=name,
            )
        if has_default and not resolved.accepts(default):
            raise SchemaError(
                f"Default {default!r} for attribute '{name}' on <{self.element}> is not a {resolved.describe()}",
                element=self.element,
                attribute=name,
            )

        attr = AttributeSchema(
            name=name,
            value_type=resolved,
            default=_copy_default(resolved, default) if has_default else None,
            has_default=has_default,
            required=required,
        )
        self._attributes[name] = attr
        return attr

    def inherit(self, other: "ElementSchema") -> None:
        """Copy every attribute of another finalized schema into this one."""
        self._ensure_open(None)
        if not other.finalized:
            raise SchemaError(
                f"<{self.element}> cannot inherit attributes from <{other.element}> before it is finalized",
                element=self.element,
            )
        clashes = [name for name in other.names() if name in self._attributes]
        if clashes:
            raise SchemaError(
                f"<{self.element}> already declares {', '.join(repr(c) for c in clashes)} inherited from <{other.element}>",
                element=self.element,
                attribute=clashes[0],
            )
        for attr in other:
            self._attributes[attr.name] = attr

    def finalize(self) -> "ElementSchema":
        if not self._finalized:
            self._finalized = True
            log.debug("Finalized schema for <%s> with %d attribute(s)", self.element, len(self._attributes))
        return self

    def _ensure_open(self, name: Optional[str]) -> None:
        if self._finalized:
            raise SchemaError(
                f"Schema for <{self.element}> is finalized; no further attributes can be declared",
                element=self.element,
                attribute=name,
            )

    def attribute(self, name: str) -> AttributeSchema:
        attr = self._attributes.get(name)
        if attr is None:
            raise UnknownAttributeError(
                f"<{self.element}> has no attribute named '{name}'",
                element=self.element,
                attribute=name,
            )
        return attr

    def check_value(self, name: str, value: Any) -> AttributeSchema:
        """Resolve `name` and verify that `value` conforms to its declared type."""
        attr = self.attribute(name)
        if not attr.accepts(value):
            raise TypeMismatchError(
                f"Attribute '{name}' on <{self.element}> expects {attr.value_type.describe()}, "
                f"got {type(value).__name__} {value!r}",
                element=self.element,
                attribute=name,
            )
        return attr

    def names(self) -> List[str]:
        return list(self._attributes.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[AttributeSchema]:
        return iter(list(self._attributes.values()))

    def __len__(self) -> int:
        return len(self._attributes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "element": self.element,
            "finalized": self._finalized,
            "attributes": [attr.to_dict() for attr in self._attributes.values()],
        }
