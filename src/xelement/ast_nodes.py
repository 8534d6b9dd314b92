"""
AST nodes for element construction expressions.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Union


@dataclass
class Span:
    """Location span for diagnostics."""

    line: int
    column: int


@dataclass
class Literal:
    """String, number, boolean or null attribute value."""

    value: Any
    span: Optional[Span] = None


@dataclass
class AttributeExpr:
    """name="value" or name={literal}; a bare name means true."""

    name: str
    value: "AttributeValue"
    span: Optional[Span] = None


@dataclass
class ElementExpr:
    """<name attr... />"""

    name: str
    attributes: List[AttributeExpr] = field(default_factory=list)
    span: Optional[Span] = None


AttributeValue = Union[Literal, ElementExpr]
