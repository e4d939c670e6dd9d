"""Logging configuration using loguru.

Everything goes to stderr: stdout belongs to command output and, in server
mode, to protocol frames.  Stdlib logging (the MCP SDK, anyio) is routed
through loguru so both share one sink and one level.
"""

from __future__ import annotations

import logging
import sys

from loguru import logger

# Terse for users, full call-site detail when debugging detection.
CLI_FORMAT = "<level>{level}</level>: {message}"
DEBUG_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

NOISY_LOGGERS = ("mcp.server.lowlevel.server", "asyncio")


class _InterceptHandler(logging.Handler):
    """Forward stdlib records to loguru, keeping the original call-site."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(level: str = "WARNING") -> None:
    """Make loguru the only sink, at *level*.

    Called from the CLI group callback, so the server subcommand inherits it.
    """
    level = level.upper()
    debugging = level in ("TRACE", "DEBUG")

    logger.remove()
    logger.add(sys.stderr, level=level, format=DEBUG_FORMAT if debugging else CLI_FORMAT, backtrace=debugging)

    logging.basicConfig(handlers=[_InterceptHandler()], level=0, force=True)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.DEBUG if debugging else logging.WARNING)

    logger.debug("Logging initialised (level={})", level)
