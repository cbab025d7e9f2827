"""
Logging setup for the ``orchestrate`` CLI.

Modules log through ``logging.getLogger(__name__)``; this module decides
where those records go. It is called once, from the CLI group callback.

Console level, highest precedence first::

    --debug / --verbose / --quiet  >  TOOLPLANE_LOG_LEVEL  >  WARNING

TOOLPLANE_LOG_FILE adds a file handler; TOOLPLANE_LOG_FILE_LEVEL sets its
level independently of the console.

At WARNING the console is meant for people: install advice is printed
as-is, other records get a short ``warning:`` / ``error:`` prefix.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

ENV_LEVEL = "TOOLPLANE_LOG_LEVEL"
ENV_FILE = "TOOLPLANE_LOG_FILE"
ENV_FILE_LEVEL = "TOOLPLANE_LOG_FILE_LEVEL"

# Records from here are user-facing advice, never prefixed
ADVISORY_LOGGER = "toolplane.core.services.install_advisor"

# Pool threads and the event loop chatter at DEBUG
_NOISY_LOGGERS = ("asyncio", "concurrent.futures")

_FMT_INFO = "%(asctime)s [%(name)s] %(message)s"
_FMT_DEBUG = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"


class _ConsoleFormatter(logging.Formatter):
    """Bare advice, prefixed everything else."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.name == ADVISORY_LOGGER or record.levelno < logging.WARNING:
            return message
        return f"{record.levelname.lower()}: {message}"


def cli_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(ENV_LEVEL) or "WARNING"


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Replace the root logger's handlers.

    Args:
        level: Console level name.
        log_file: Also log to this file.
        log_file_level: File level name (default: same as ``level``).
        quiet_third_party: Hold pool/event-loop loggers at WARNING unless
            the console is at DEBUG.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))

    root = logging.getLogger()
    root.handlers.clear()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def setup_from_env(
    level: str,
    environ: Mapping[str, str] | None = None,
    quiet_third_party: bool = True,
) -> None:
    """``setup_logging`` with file output taken from TOOLPLANE_LOG_FILE*."""
    env = os.environ if environ is None else environ
    setup_logging(
        level=level,
        log_file=env.get(ENV_FILE) or None,
        log_file_level=env.get(ENV_FILE_LEVEL) or None,
        quiet_third_party=quiet_third_party,
    )


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if level <= logging.DEBUG:
        handler.setFormatter(logging.Formatter(_FMT_DEBUG, datefmt="%H:%M:%S"))
    elif level <= logging.INFO:
        handler.setFormatter(logging.Formatter(_FMT_INFO, datefmt="%H:%M:%S"))
    else:
        handler.setFormatter(_ConsoleFormatter("%(message)s"))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FMT_FILE, datefmt="%Y-%m-%d %H:%M:%S"))
    return handler


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = logging.getLevelName(level.strip().upper())
    return numeric if isinstance(numeric, int) else logging.WARNING
