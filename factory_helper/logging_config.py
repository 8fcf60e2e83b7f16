"""Route generator log records to stderr for the ``factory-helper`` command."""

import logging
import sys

# reflection queries are logged by these at INFO
SQLALCHEMY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool")


def resolve_level(name: str | None) -> int:
    """Numeric level for ``name``; unknown or empty names mean WARNING."""
    level = logging.getLevelName((name or "").upper())
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(level: str = "WARNING") -> None:
    """
    Send records to stderr so stdout carries only the result message.

    Skipped models and failures are plain messages; with ``-v`` each line
    also names the service that logged it.
    """
    numeric_level = resolve_level(level)
    if numeric_level <= logging.INFO:
        fmt = "%(levelname)s %(name)s: %(message)s"
    else:
        fmt = "%(message)s"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(numeric_level)

    quiet = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in SQLALCHEMY_LOGGERS:
        logging.getLogger(name).setLevel(quiet)
