"""Logging utilities for the MCP engine."""

import logging
from typing import Literal

from rich.console import Console
from rich.logging import RichHandler

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def get_logger(name: str) -> logging.Logger:
    """Get a logger nested under the ``mcp_engine`` namespace.

    Args:
        name: the name of the logger, which will be prefixed with 'mcp_engine.'

    Returns:
        a configured logger instance
    """
    if name == "mcp_engine" or name.startswith("mcp_engine."):
        return logging.getLogger(name)
    return logging.getLogger(f"mcp_engine.{name}")


def configure_logging(level: LogLevel = "INFO") -> None:
    """Configure logging for hosts embedding the engine.

    Output always goes to stderr so it never interleaves with a stdio channel.

    Args:
        level: the log level to use
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )
