"""
Logging configuration for the survey API.

``setup_logging`` attaches a console handler and, optionally, a file
handler to the root logger.  Handlers are attached once per process
(``create_app`` runs once per test), but the requested level is applied
on every call so a later app can raise or lower verbosity.

Per-request chatter from ``uvicorn.access`` and from ``httpx`` (the
transport behind ``TestClient``) is held at WARNING unless the service
itself runs at DEBUG.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

NOISY_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


def resolve_level(level: str) -> int:
    """Map a level name to its number; unknown names fall back to INFO."""
    value = getattr(logging, str(level).upper(), None)
    return value if isinstance(value, int) else logging.INFO


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path to a file to log messages to.  If omitted, no file
        handler is added.
    quiet : Iterable[str]
        Loggers held at WARNING while ``level`` is above DEBUG.
    """
    logger = logging.getLogger()
    numeric_level = resolve_level(level)
    logger.setLevel(numeric_level)

    noisy_level = logging.NOTSET if numeric_level <= logging.DEBUG else logging.WARNING
    for name in quiet:
        logging.getLogger(name).setLevel(noisy_level)

    if logger.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if logfile:
        log_path = Path(logfile).resolve()
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
