"""Logger handles carrying their own verbosity.

Each splitter gets its own handle from :func:`build_logger` instead of
reconfiguring a shared module-level logger, so two splitters with different
``log_level`` settings can run side by side.
"""

from __future__ import annotations

import logging

from critsplit.errors import ConfigError

TRACE = 5

LOG_LEVELS: dict[str, int] = {
    "trace": TRACE,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "silent": logging.CRITICAL + 10,
}


def resolve_level(name: str) -> int:
    """Map a level name (``info``, ``warn``, ``silent``...) to a logging level."""
    key = str(name).lower()
    if key == "warning":
        key = "warn"
    try:
        return LOG_LEVELS[key]
    except KeyError:
        choices = ", ".join(LOG_LEVELS)
        raise ConfigError(f"Unknown log level {name!r} (expected one of: {choices})") from None


class LevelAdapter(logging.LoggerAdapter):
    """A LoggerAdapter that applies its own threshold before delegating."""

    def __init__(self, logger: logging.Logger, threshold: int) -> None:
        super().__init__(logger, {})
        self.threshold = threshold

    def isEnabledFor(self, level: int) -> bool:  # noqa: N802
        return level >= self.threshold and self.logger.isEnabledFor(level)


def build_logger(level: str = "info", name: str = "critsplit") -> LevelAdapter:
    """Return a logger handle for one splitter invocation."""
    return LevelAdapter(logging.getLogger(name), resolve_level(level))
