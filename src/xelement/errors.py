"""
Error types for the xelement model and its tooling.
"""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class XElementError(Exception):
    """Base error with optional location and element metadata."""

    message: str
    line: Optional[int] = None
    column: Optional[int] = None
    code: str = "XEL-0000"
    element: Optional[str] = None
    attribute: Optional[str] = None
    diagnostics: list[dict[str, Any]] | None = None

    def __post_init__(self) -> None:
        if self.diagnostics is None:
            entry: dict[str, Any] = {"code": self.code, "message": self.message, "severity": "error"}
            if self.element is not None:
                entry["element"] = self.element
            if self.attribute is not None:
                entry["attribute"] = self.attribute
            if self.line is not None:
                entry["line"] = self.line
                entry["column"] = self.column
            self.diagnostics = [entry]

    def __str__(self) -> str:  # pragma: no cover - trivial
        location = ""
        if self.line is not None:
            location = f" (line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"
            location += ")"
        return f"{self.message}{location}"


@dataclass
class LexError(XElementError):
    """Construction expression could not be tokenized."""

    code: str = "XEL-0001"


@dataclass
class ParseError(XElementError):
    """Construction expression is not well formed."""

    code: str = "XEL-0002"


@dataclass
class SchemaError(XElementError):
    """Raised while an element type is being defined.

    Duplicate names, unsupported value types, nonconforming defaults and
    declarations against a finalized schema all land here.
    """

    code: str = "XEL-1001"


@dataclass
class UnknownAttributeError(XElementError):
    """Attribute name is not part of the element's schema."""

    code: str = "XEL-2001"


@dataclass
class TypeMismatchError(XElementError):
    """Value does not conform to the attribute's declared type."""

    code: str = "XEL-2002"


@dataclass
class MissingAttributeError(XElementError):
    """Required attribute was not supplied at construction."""

    code: str = "XEL-2003"


@dataclass
class AttributeAccessError(XElementError):
    """External write refused because writes are limited to the element's own behaviors."""

    code: str = "XEL-2004"


@dataclass
class UnknownElementError(XElementError):
    """Element type name is not registered."""

    code: str = "XEL-3001"


@dataclass
class UnknownBehaviorError(XElementError):
    """Element type has no behavior with the requested name."""

    code: str = "XEL-3002"


@dataclass
class DefinitionFileError(XElementError):
    """Definitions file is unreadable or does not match the expected layout."""

    code: str = "XEL-4001"
    path: Optional[str] = None
