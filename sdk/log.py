from __future__ import annotations
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level}")
    return resolved

def configure_logging(level: str | int = logging.WARNING) -> None:
    """Route tracker loggers to stderr at ``level`` (name or number)."""
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT, force=True)
