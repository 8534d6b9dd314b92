"""
Environment-driven configuration for element types and the CLI.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_bool(environ, name: str, default: bool) -> bool:
    val = environ.get(name)
    if val is None:
        return default
    normalized = str(val).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class XElementConfig:
    # When False, Element.set is only allowed from inside the element's own behaviors.
    external_writes: bool = True
    log_level: str = "WARNING"
    definitions_path: Optional[str] = None

    @property
    def log_level_number(self) -> int:
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.WARNING


def load_config(env: Optional[dict] = None) -> XElementConfig:
    environ = os.environ if env is None else env
    return XElementConfig(
        external_writes=_env_bool(environ, "XEL_EXTERNAL_WRITES", True),
        log_level=(environ.get("XEL_LOG_LEVEL") or "WARNING").strip().upper(),
        definitions_path=environ.get("XEL_DEFINITIONS") or None,
    )
