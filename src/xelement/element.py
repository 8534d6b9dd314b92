"""
Element types and element instances.

An ElementType pairs a finalized ElementSchema with a set of behaviors.
Calling `construct` (or the type itself) yields an Element whose attribute
mapping has exactly the schema's names, validated before the instance exists.
"""

from __future__ import annotations

import contextvars
import copy
import logging
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from .config import XElementConfig, load_config
from .errors import (
    AttributeAccessError,
    MissingAttributeError,
    TypeMismatchError,
    UnknownAttributeError,
    UnknownBehaviorError,
)
from .schema import ElementSchema

log = logging.getLogger(__name__)

Behavior = Callable[..., Any]

# Element whose behavior is currently executing in this context.
_ACTIVE_ELEMENT: contextvars.ContextVar[Optional["Element"]] = contextvars.ContextVar(
    "xelement_active_element", default=None
)


class ElementType:
    """
    A named element type: an attribute schema plus the behaviors its instances run.

    Usage:
        schema = ElementSchema("my-element")
        schema.declare_attribute("a", "string", "")
        schema.declare_attribute("b", "string", "")
        MyElement = ElementType("my-element", schema)

        @MyElement.behavior
        def describe(element):
            return f"{element.get('a')}/{element.get('b')}"

        MyElement(b="hi").call("describe")  # "/hi"
    """

    def __init__(
        self,
        name: str,
        schema: Optional[ElementSchema] = None,
        behaviors: Optional[Mapping[str, Behavior]] = None,
        *,
        description: Optional[str] = None,
        config: Optional[XElementConfig] = None,
    ) -> None:
        self.name = name
        self.schema = schema if schema is not None else ElementSchema(name)
        self.description = description
        self.config = config if config is not None else load_config()
        self._behaviors: Dict[str, Behavior] = dict(behaviors or {})

    def behavior(self, func: Optional[Behavior] = None, *, name: Optional[str] = None):
        """Register a behavior; usable as `@etype.behavior` or `@etype.behavior(name="x")`."""

        def _register(fn: Behavior) -> Behavior:
            self._behaviors[name or fn.__name__] = fn
            return fn

        if func is not None:
            return _register(func)
        return _register

    def behaviors(self) -> List[str]:
        return list(self._behaviors.keys())

    def get_behavior(self, name: str) -> Behavior:
        fn = self._behaviors.get(name)
        if fn is None:
            raise UnknownBehaviorError(
                f"<{self.name}> has no behavior named '{name}'",
                element=self.name,
            )
        return fn

    def construct(self, explicit_values: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "Element":
        values: Dict[str, Any] = dict(explicit_values or {})
        for key, value in kwargs.items():
            name = self._keyword_to_attribute(key)
            if name in values:
                raise TypeMismatchError(
                    f"Attribute '{name}' on <{self.name}> was given both in the mapping and as {key}=",
                    element=self.name,
                    attribute=name,
                )
            values[name] = value
        return Element(self, values)

    __call__ = construct

    def _keyword_to_attribute(self, key: str) -> str:
        # Python keywords cannot contain '-', so data_id= maps to a declared data-id.
        if key not in self.schema and "_" in key:
            hyphenated = key.replace("_", "-")
            if hyphenated in self.schema:
                return hyphenated
        return key

    def to_dict(self) -> dict[str, Any]:
        data = self.schema.to_dict()
        data["element"] = self.name
        data["behaviors"] = self.behaviors()
        if self.description:
            data["description"] = self.description
        return data

    def __repr__(self) -> str:
        return f"ElementType({self.name!r}, attributes={self.schema.names()!r})"


class Element:
    """
    One validated instance of an ElementType.

    Attribute values are read with `get` and replaced with `set`; both go
    through the type's schema. Writes are serialized per instance.
    """

    def __init__(self, element_type: ElementType, explicit_values: Mapping[str, Any]) -> None:
        schema = element_type.schema.finalize()
        for name in explicit_values:
            schema.attribute(name)
        attributes: Dict[str, Any] = {}
        for name, value in explicit_values.items():
            schema.check_value(name, value)
            attributes[name] = value
        for attr in schema:
            if attr.name in attributes:
                continue
            if attr.required:
                raise MissingAttributeError(
                    f"I can't create <{element_type.name}> because required attribute '{attr.name}' is missing.",
                    element=element_type.name,
                    attribute=attr.name,
                )
            attributes[attr.name] = attr.initial_value()

        self._element_type = element_type
        self._attributes = attributes
        self._lock = threading.RLock()
        log.debug("Constructed <%s> with %d explicit attribute(s)", element_type.name, len(explicit_values))

    @property
    def element_type(self) -> ElementType:
        return self._element_type

    @property
    def name(self) -> str:
        return self._element_type.name

    def get(self, name: str) -> Any:
        if name not in self._attributes:
            raise UnknownAttributeError(
                f"<{self.name}> has no attribute named '{name}'",
                element=self.name,
                attribute=name,
            )
        with self._lock:
            return self._attributes[name]

    def set(self, name: str, value: Any) -> None:
        self._element_type.schema.check_value(name, value)
        if not self._element_type.config.external_writes and _ACTIVE_ELEMENT.get() is not self:
            raise AttributeAccessError(
                f"Attribute '{name}' on <{self.name}> can only be written by the element's own behaviors",
                element=self.name,
                attribute=name,
            )
        with self._lock:
            self._attributes[name] = value

    def attributes(self) -> Dict[str, Any]:
        with self._lock:
            return dict(self._attributes)

    def call(self, behavior: str, *args: Any, **kwargs: Any) -> Any:
        fn = self._element_type.get_behavior(behavior)
        token = _ACTIVE_ELEMENT.set(self)
        try:
            return fn(self, *args, **kwargs)
        finally:
            _ACTIVE_ELEMENT.reset(token)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self._element_type is other._element_type and self.attributes() == other.attributes()

    __hash__ = None  # type: ignore[assignment]

    def __deepcopy__(self, memo: Dict[int, Any]) -> "Element":
        # The element type and its schema stay shared; only attribute values are copied.
        clone = object.__new__(Element)
        memo[id(self)] = clone
        clone._element_type = self._element_type
        clone._attributes = copy.deepcopy(self.attributes(), memo)
        clone._lock = threading.RLock()
        return clone

    def __repr__(self) -> str:
        attrs = " ".join(f"{k}={v!r}" for k, v in self.attributes().items())
        return f"<{self.name} {attrs} />" if attrs else f"<{self.name} />"
