"""
Stdlib logging setup for the ``wagerbook`` logger tree.

Library modules only call ``logging.getLogger(__name__)``; the composing
application calls ``setup_logging`` once.
"""
import logging
import sys
from pathlib import Path
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

from wagerbook.config import ObservabilitySettings

CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
JSON_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def _formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter(fmt=JSON_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")
    return logging.Formatter(fmt=CONSOLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    name: str = "wagerbook",
    level: Optional[str] = None,
    log_file: Optional[Path] = None,
    config: Optional[ObservabilitySettings] = None,
) -> logging.Logger:
    """
    Attach a stderr handler (and optionally a file handler) to ``name``.

    Args:
        name: Logger name
        level: Overrides ``config.log_level``
        log_file: Optional file path for log output
        config: Observability settings; defaults to the global settings

    Returns:
        Configured logger instance
    """
    if config is None:
        from wagerbook.config import settings
        config = settings.observability

    logger = logging.getLogger(name)
    logger.setLevel((level or config.log_level).upper())

    # Repeated calls replace handlers instead of stacking them
    logger.handlers = []

    # stderr keeps command output on stdout clean
    formatter = _formatter(config.log_format)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
