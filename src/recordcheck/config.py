"""Runtime configuration for recordcheck."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def _log_level(name: str) -> str:
    """Return the upper-cased level name, or WARNING if logging does not know it."""
    level = name.strip().upper()
    if level in logging.getLevelNamesMapping():
        return level
    return "WARNING"


@dataclass
class RecordCheckConfig:
    """Settings read from the environment.

    Attributes:
        rules_path: Default rule-set file for the CLI
        log_level: Root logging level name
        strict: Treat unknown rule names as errors in ``rules check``
    """

    rules_path: Path | None = None
    log_level: str = "WARNING"
    strict: bool = False

    @classmethod
    def from_env(cls) -> RecordCheckConfig:
        """Create config from environment variables.

        Resolution:
        1. RECORDCHECK_RULES: path of the default rule-set file
        2. RECORDCHECK_LOG_LEVEL: logging level name (unknown names fall back to WARNING)
        3. RECORDCHECK_STRICT: "1"/"true"/"yes"/"on" enables strict mode
        """
        rules = os.environ.get("RECORDCHECK_RULES")
        return cls(
            rules_path=Path(rules) if rules else None,
            log_level=_log_level(os.environ.get("RECORDCHECK_LOG_LEVEL", "WARNING")),
            strict=os.environ.get("RECORDCHECK_STRICT", "").strip().lower() in _TRUTHY,
        )
