"""
Load element type definitions from a TOML file.

    [elements.my-element]
    description = "Two text attributes"
    extends = ["base-element"]

    [elements.my-element.attributes]
    a = { type = "string", default = "" }
    size = { type = "enum", values = ["s", "m", "l"], default = "m" }
    label = { type = "string", required = true }
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .diagnostics import Diagnostic, create_diagnostic, diagnostic_from_error
from .errors import DefinitionFileError, SchemaError, XElementError
from .registry import ElementRegistry

log = logging.getLogger(__name__)


class AttributeDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str
    default: Any = None
    required: bool = False
    values: Optional[List[str]] = None
    element: Optional[str] = None

    def to_spec(self) -> Dict[str, Any]:
        spec: Dict[str, Any] = {"type": self.type, "required": self.required}
        if "default" in self.model_fields_set:
            spec["default"] = self.default
        if self.values is not None:
            spec["values"] = self.values
        if self.element is not None:
            spec["element"] = self.element
        return spec


class ElementDefinition(BaseModel):
    model_config = ConfigDict(extra="forbid")

    description: Optional[str] = None
    extends: List[str] = Field(default_factory=list)
    attributes: Dict[str, AttributeDefinition] = Field(default_factory=dict)


class DefinitionsDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    elements: Dict[str, ElementDefinition] = Field(default_factory=dict)


def _read_document(path: Path) -> DefinitionsDocument:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise DefinitionFileError(f"Cannot read definitions file {path}: {exc}", path=str(path)) from exc
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise DefinitionFileError(f"{path} is not valid TOML: {exc}", path=str(path)) from exc
    try:
        return DefinitionsDocument.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise DefinitionFileError(f"{path} does not match the definitions layout: {problems}", path=str(path)) from exc


def _declaration_order(document: DefinitionsDocument) -> tuple[List[str], List[str], Dict[str, str]]:
    """Order elements so that every `extends` parent in the file comes first.

    Returns (ordered, cyclic, blocked). Cyclic elements sit on an extends
    cycle; blocked elements extend one of them, mapped to that parent.
    """

    ordered: List[str] = []
    state: Dict[str, str] = {}
    stack: List[str] = []
    cyclic: List[str] = []
    blocked: Dict[str, str] = {}

    def visit(name: str) -> bool:
        mark = state.get(name)
        if mark == "done":
            return True
        if mark == "failed":
            return False
        if mark == "visiting":
            for member in stack[stack.index(name) :]:
                if member not in cyclic:
                    cyclic.append(member)
            return False
        state[name] = "visiting"
        stack.append(name)
        failed_parent: Optional[str] = None
        for parent in document.elements[name].extends:
            if parent in document.elements and not visit(parent) and failed_parent is None:
                failed_parent = parent
        stack.pop()
        if failed_parent is None:
            state[name] = "done"
            ordered.append(name)
            return True
        state[name] = "failed"
        if name not in cyclic:
            blocked[name] = failed_parent
        return False

    for name in document.elements:
        visit(name)
    return ordered, cyclic, blocked


def load_definitions(
    path: Path | str,
    registry: Optional[ElementRegistry] = None,
    *,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> ElementRegistry:
    """
    Declare every element in a definitions file into `registry`.

    Without `diagnostics` the first error is raised. With a list, each problem
    is appended to it and loading continues with the remaining elements.
    """

    path = Path(path)
    registry = registry if registry is not None else ElementRegistry()
    collecting = diagnostics is not None

    try:
        document = _read_document(path)
    except XElementError as exc:
        if not collecting:
            raise
        diagnostics.append(diagnostic_from_error(exc, file=str(path)))
        return registry

    ordered, cyclic, blocked = _declaration_order(document)
    failures = [SchemaError(f"<{name}> has a cycle in its extends chain", element=name) for name in cyclic]
    failures.extend(
        SchemaError(f"<{name}> extends <{parent}>, which has a cycle in its extends chain", element=name)
        for name, parent in blocked.items()
    )
    for exc in failures:
        if not collecting:
            raise exc
        diagnostics.append(diagnostic_from_error(exc, file=str(path)))

    for name in ordered:
        definition = document.elements[name]
        try:
            registry.define(
                name,
                {attr_name: attr.to_spec() for attr_name, attr in definition.attributes.items()},
                extends=definition.extends,
                description=definition.description,
            )
        except XElementError as exc:
            if not collecting:
                raise
            diagnostics.append(diagnostic_from_error(exc, file=str(path)))

    for element, attribute, target in registry.unresolved_references():
        if not collecting:
            raise SchemaError(
                f"Attribute '{attribute}' on <{element}> refers to unknown element <{target}>",
                code="XEL-1002",
                element=element,
                attribute=attribute,
            )
        diagnostics.append(
            create_diagnostic(
                "XEL-1002",
                element=element,
                attribute=attribute,
                target=target,
                file=str(path),
                hint=f"Declare <{target}> or fix the attribute's element target.",
            )
        )

    log.debug("Loaded %d element definition(s) from %s", len(ordered), path)
    return registry
