"""Logger setup shared by every jobfit module.

Handlers hang off the ``jobfit`` package logger rather than the root logger,
so an application embedding the engine keeps control of its own logging.
``JOBFIT_LOG_LEVEL`` (or the generic ``LOG_LEVEL``) picks the level and
``JOBFIT_LOG_DIR`` turns on a daily log file.
"""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

PACKAGE_LOGGER = "jobfit"
LINE_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

_ready = False


def get_logger(name: str) -> logging.Logger:
    """Named logger under the package logger, set up on first use."""
    global _ready
    if not _ready:
        setup_logging()
        _ready = True
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def level_from_env() -> int:
    raw = os.environ.get("JOBFIT_LOG_LEVEL") or os.environ.get("LOG_LEVEL") or "INFO"
    level = logging.getLevelName(raw.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: int | None = None, log_dir: str | Path | None = None) -> logging.Logger:
    """Attach console (and optional file) handlers to the package logger.

    Calling it again replaces the handlers it added before.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    level = level_from_env() if level is None else level
    package.setLevel(level)

    for handler in [h for h in package.handlers if getattr(h, "_jobfit", False)]:
        package.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LINE_FORMAT, datefmt=TIME_FORMAT)
    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(formatter)
    _own(package, console)

    if log_dir is None:
        log_dir = os.environ.get("JOBFIT_LOG_DIR", "").strip() or None
    if log_dir:
        folder = Path(log_dir)
        try:
            folder.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(
                folder / f"jobfit_{date.today():%Y-%m-%d}.log", encoding="utf-8",
            )
        except OSError as exc:
            package.warning("Log file disabled, cannot write to %s: %s", folder, exc)
        else:
            file_handler.setFormatter(formatter)
            _own(package, file_handler)
    return package


def _own(logger: logging.Logger, handler: logging.Handler) -> None:
    handler._jobfit = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
