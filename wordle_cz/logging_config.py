"""Logging setup for the command line helper."""

from __future__ import annotations

import logging
from typing import Optional, Union

from wordle_cz.config import CONFIG

_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_configured = False


def _resolve_level(level: Union[str, int, None]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level or "INFO").strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Union[str, int, None] = None, *, force: bool = False) -> int:
    """Set up root logging once; `level` falls back to WORDLE_CZ_LOG_LEVEL, then INFO.

    Returns the resolved level.
    """
    global _configured

    resolved = _resolve_level(level if level is not None else CONFIG["log_level"])
    if _configured and not force:
        return resolved
    logging.basicConfig(level=resolved, format=_FORMAT, force=force)
    logging.getLogger("wordle_cz").setLevel(resolved)
    _configured = True
    return resolved
