"""
Registry of element types by name.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config import XElementConfig, load_config
from .element import Behavior, ElementType
from .errors import SchemaError, UnknownElementError
from .schema import NO_DEFAULT, ElementSchema
from .value_types import ElementRefType

log = logging.getLogger(__name__)


class ElementRegistry:
    """
    Central registry for element types.

    Usage:
        registry = ElementRegistry()
        registry.define("my-element", {"a": {"type": "string", "default": ""}})
        element = registry.get("my-element").construct({"a": "hi"})
    """

    def __init__(self, config: Optional[XElementConfig] = None) -> None:
        self.config = config if config is not None else load_config()
        self._types: Dict[str, ElementType] = {}
        self._lock = threading.RLock()

    def register(self, element_type: ElementType) -> ElementType:
        with self._lock:
            if element_type.name in self._types:
                raise SchemaError(
                    f"Element <{element_type.name}> is already registered",
                    element=element_type.name,
                )
            element_type.schema.finalize()
            self._types[element_type.name] = element_type
        log.debug("Registered <%s>", element_type.name)
        return element_type

    def define(
        self,
        name: str,
        attributes: Optional[Mapping[str, Any]] = None,
        behaviors: Optional[Mapping[str, Behavior]] = None,
        *,
        extends: Iterable[str] = (),
        description: Optional[str] = None,
    ) -> ElementType:
        """
        Declare, finalize and register an element type in one step.

        Each attribute is either a type name ("string") or a dict with the keys
        `type`, and optionally `default`, `required`, `values` (enum) and
        `element` (element-typed attributes).
        """

        schema = ElementSchema(name)
        for parent in extends:
            schema.inherit(self.get(parent).schema)
        for attr_name, spec in (attributes or {}).items():
            if isinstance(spec, Mapping):
                unknown = set(spec) - {"type", "default", "required", "values", "element"}
                if unknown:
                    raise SchemaError(
                        f"Attribute '{attr_name}' on <{name}> has unknown keys: {', '.join(sorted(unknown))}",
                        element=name,
                        attribute=attr_name,
                    )
                if "type" not in spec:
                    raise SchemaError(
                        f"Attribute '{attr_name}' on <{name}> is missing a type",
                        element=name,
                        attribute=attr_name,
                    )
                schema.declare_attribute(
                    attr_name,
                    spec["type"],
                    spec.get("default", NO_DEFAULT),
                    required=bool(spec.get("required", False)),
                    values=spec.get("values"),
                    element=spec.get("element"),
                )
            else:
                schema.declare_attribute(attr_name, spec)
        element_type = ElementType(name, schema.finalize(), behaviors, description=description, config=self.config)
        return self.register(element_type)

    def get(self, name: str) -> ElementType:
        with self._lock:
            element_type = self._types.get(name)
        if element_type is None:
            raise UnknownElementError(f"Element <{name}> is not registered", element=name)
        return element_type

    def unregister(self, name: str) -> None:
        with self._lock:
            self._types.pop(name, None)

    def list_names(self) -> List[str]:
        with self._lock:
            return list(self._types.keys())

    def unresolved_references(self) -> List[tuple[str, str, str]]:
        """Return (element, attribute, target) for element-typed attributes whose target is not registered."""
        missing: List[tuple[str, str, str]] = []
        with self._lock:
            for element_type in self._types.values():
                for attr in element_type.schema:
                    target = attr.value_type
                    if isinstance(target, ElementRefType) and target.element not in self._types:
                        missing.append((element_type.name, attr.name, target.element))
        return missing

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._types

    def __len__(self) -> int:
        with self._lock:
            return len(self._types)
