"""
Structured diagnostics for definitions files and construction expressions.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .errors import XElementError


@dataclass(frozen=True)
class DiagnosticDefinition:
    code: str
    category: str
    default_severity: str
    message_template: str


_DEFINITIONS: Dict[str, DiagnosticDefinition] = {
    "XEL-0001": DiagnosticDefinition("XEL-0001", "syntax", "error", "Lexical error: {detail}"),
    "XEL-0002": DiagnosticDefinition("XEL-0002", "syntax", "error", "Syntax error: {detail}"),
    "XEL-1001": DiagnosticDefinition("XEL-1001", "schema", "error", "Invalid element definition: {detail}"),
    "XEL-1002": DiagnosticDefinition(
        "XEL-1002", "schema", "error", "Attribute '{attribute}' on <{element}> refers to unknown element <{target}>"
    ),
    "XEL-2001": DiagnosticDefinition("XEL-2001", "attribute", "error", "Unknown attribute: {detail}"),
    "XEL-2002": DiagnosticDefinition("XEL-2002", "attribute", "error", "Type mismatch: {detail}"),
    "XEL-2003": DiagnosticDefinition("XEL-2003", "attribute", "error", "Missing attribute: {detail}"),
    "XEL-2004": DiagnosticDefinition("XEL-2004", "attribute", "error", "Access denied: {detail}"),
    "XEL-3001": DiagnosticDefinition("XEL-3001", "reference", "error", "Unknown element: {detail}"),
    "XEL-3002": DiagnosticDefinition("XEL-3002", "reference", "error", "Unknown behavior: {detail}"),
    "XEL-4001": DiagnosticDefinition("XEL-4001", "definitions", "error", "Invalid definitions file: {detail}"),
}


def get_definition(code: str) -> Optional[DiagnosticDefinition]:
    return _DEFINITIONS.get(code)


def all_definitions() -> Iterable[DiagnosticDefinition]:
    return _DEFINITIONS.values()


@dataclass
class Diagnostic:
    code: str
    severity: str
    category: str
    message: str
    element: Optional[str] = None
    attribute: Optional[str] = None
    file: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    hint: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


def create_diagnostic(code: str, *, severity: Optional[str] = None, hint: Optional[str] = None, **fields: Any) -> Diagnostic:
    definition = _DEFINITIONS.get(code)
    if definition is None:
        raise KeyError(f"Unknown diagnostic code {code}")
    location = {k: fields.get(k) for k in ("element", "attribute", "file", "line", "column")}
    return Diagnostic(
        code=code,
        severity=severity or definition.default_severity,
        category=definition.category,
        message=definition.message_template.format(**fields),
        hint=hint,
        **location,
    )


def diagnostic_from_error(exc: XElementError, *, file: Optional[str] = None) -> Diagnostic:
    definition = _DEFINITIONS.get(exc.code)
    return Diagnostic(
        code=exc.code,
        severity=definition.default_severity if definition else "error",
        category=definition.category if definition else "general",
        message=exc.message,
        element=exc.element,
        attribute=exc.attribute,
        file=file,
        line=exc.line,
        column=exc.column,
    )


def summarize(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    summary = {"errors": 0, "warnings": 0, "infos": 0}
    for diag in diagnostics:
        if diag.severity == "error":
            summary["errors"] += 1
        elif diag.severity == "warning":
            summary["warnings"] += 1
        else:
            summary["infos"] += 1
    return summary


def check_definitions(path: Path) -> List[Diagnostic]:
    """Load a definitions file and collect every problem instead of stopping at the first."""
    from .loader import load_definitions

    diagnostics: List[Diagnostic] = []
    load_definitions(path, diagnostics=diagnostics)
    return diagnostics
