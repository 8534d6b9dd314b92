"""
Evaluate construction expressions into Element instances.
"""

from __future__ import annotations

from typing import Any, Dict

from . import ast_nodes
from .element import Element
from .errors import XElementError
from .parser import parse_element_source
from .registry import ElementRegistry


def _located(exc: XElementError, span: ast_nodes.Span | None) -> XElementError:
    if span is not None and exc.line is None:
        exc.line = span.line
        exc.column = span.column
        for entry in exc.diagnostics or []:
            entry.setdefault("line", span.line)
            entry.setdefault("column", span.column)
    return exc


def _evaluate_value(value: ast_nodes.AttributeValue, registry: ElementRegistry) -> Any:
    if isinstance(value, ast_nodes.ElementExpr):
        return evaluate(value, registry)
    return value.value


def evaluate(node: ast_nodes.ElementExpr, registry: ElementRegistry) -> Element:
    try:
        element_type = registry.get(node.name)
    except XElementError as exc:
        raise _located(exc, node.span)
    values: Dict[str, Any] = {}
    for attr in node.attributes:
        values[attr.name] = _evaluate_value(attr.value, registry)
    try:
        return element_type.construct(values)
    except XElementError as exc:
        span = node.span
        for attr in node.attributes:
            if attr.name == exc.attribute:
                span = attr.span
                break
        raise _located(exc, span)


def build_element(source: str | ast_nodes.ElementExpr, registry: ElementRegistry) -> Element:
    """Parse (if needed) and construct an element, nested element values first."""
    node = parse_element_source(source) if isinstance(source, str) else source
    return evaluate(node, registry)
