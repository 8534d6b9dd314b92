"""
Command-line interface for xelement (xel).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional

from .builder import build_element
from .config import XElementConfig, load_config
from .diagnostics import check_definitions, summarize
from .element import Element
from .errors import XElementError
from .loader import load_definitions
from .registry import ElementRegistry
from .version import SCHEMA_FORMAT_VERSION, __version__


def build_cli_parser() -> argparse.ArgumentParser:
    cli = argparse.ArgumentParser(prog="xel", description="Typed element definitions toolkit")
    cli.add_argument(
        "--version",
        action="version",
        version=f"xelement {__version__} (Python {sys.version.split()[0]})",
    )
    cli.add_argument("--log-level", help="Logging level (defaults to XEL_LOG_LEVEL or WARNING)")
    sub = cli.add_subparsers(dest="command", required=True)

    check_cmd = sub.add_parser("check", help="Validate a definitions file and print diagnostics")
    check_cmd.add_argument("file", type=Path, nargs="?", help="Definitions file (defaults to XEL_DEFINITIONS)")

    schema_cmd = sub.add_parser("schema", help="Print element schemas as JSON")
    schema_cmd.add_argument("file", type=Path, nargs="?", help="Definitions file (defaults to XEL_DEFINITIONS)")
    schema_cmd.add_argument("--element", help="Only print this element")

    build_cmd = sub.add_parser("build", help="Construct an element from an expression and print its attributes")
    build_cmd.add_argument("expression", help="Construction expression, e.g. '<my-element b=\"hi\" />'")
    build_cmd.add_argument("--file", type=Path, help="Definitions file (defaults to XEL_DEFINITIONS)")

    return cli


def _resolve_file(arg: Optional[Path], config: XElementConfig) -> Path:
    if arg is not None:
        return arg
    if config.definitions_path:
        return Path(config.definitions_path)
    raise SystemExit("No definitions file given and XEL_DEFINITIONS is not set.")


def _element_payload(element: Element) -> dict[str, Any]:
    attributes: dict[str, Any] = {}
    for name, value in element.attributes().items():
        attributes[name] = _element_payload(value) if isinstance(value, Element) else value
    return {"element": element.name, "attributes": attributes}


def _print_json(payload: Any) -> None:
    print(json.dumps(payload, indent=2, default=str))


def main(argv: list[str] | None = None) -> None:
    cli = build_cli_parser()
    args = cli.parse_args(argv)
    config = load_config()
    if args.log_level:
        config = replace(config, log_level=args.log_level.upper())
    logging.basicConfig(level=config.log_level_number)

    if args.command == "check":
        path = _resolve_file(args.file, config)
        diagnostics = check_definitions(path)
        summary = summarize(diagnostics)
        _print_json(
            {
                "file": str(path),
                "diagnostics": [d.to_dict() for d in diagnostics],
                "summary": summary,
            }
        )
        if summary["errors"]:
            raise SystemExit(1)
        return

    registry = ElementRegistry(config)
    path = _resolve_file(args.file, config)
    try:
        load_definitions(path, registry)
    except XElementError as exc:
        raise SystemExit(str(exc)) from exc

    if args.command == "schema":
        names = [args.element] if args.element else registry.list_names()
        try:
            elements = [registry.get(name).to_dict() for name in names]
        except XElementError as exc:
            raise SystemExit(str(exc)) from exc
        _print_json({"schema_format_version": SCHEMA_FORMAT_VERSION, "elements": elements})
        return

    if args.command == "build":
        try:
            element = build_element(args.expression, registry)
        except XElementError as exc:
            raise SystemExit(f"{exc.code}: {exc}") from exc
        _print_json(_element_payload(element))
        return


if __name__ == "__main__":  # pragma: no cover
    main()
