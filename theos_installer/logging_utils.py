from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = "~/.cache/theos-installer/install.log"

_FILE_FMT = logging.Formatter(
    fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%S%z",
)


def active_log_path() -> Optional[str]:
    return getattr(logging.getLogger(), "_theos_installer_log_path", None)


def attach_log_file(log_path: str) -> str:
    """Add the log file handler (once).

    The file gets every record (DEBUG and up, timestamped), so command output
    captured by run_cmd is available after a failure. If the requested file
    can't be opened we fall back to ./theos-installer.log.

    Returns the actual file path being used.
    """

    logger = logging.getLogger()
    existing = active_log_path()
    if existing:
        return existing

    requested = Path(log_path).expanduser()
    try:
        requested.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(requested)
        chosen_path = str(requested)
    except OSError:
        fallback = Path.cwd() / "theos-installer.log"
        file_handler = logging.FileHandler(fallback)
        chosen_path = str(fallback)
    file_handler.setFormatter(_FILE_FMT)
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    setattr(logger, "_theos_installer_log_path", chosen_path)
    logging.getLogger(__name__).debug("Logging to file (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path


def configure_logging(
    log_path: Optional[str] = DEFAULT_LOG_PATH,
    verbose: bool = False,
    also_console: bool = True,
) -> Optional[str]:
    """Configure logging.

    - The console gets bare messages at INFO, or DEBUG with verbose=True.
    - log_path=None configures the console only; the file can be attached
      later with attach_log_file() once writing to disk is allowed.

    Returns the log file path in use, if any.
    """

    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if not getattr(logger, "_theos_installer_configured", False):
        if also_console:
            console = logging.StreamHandler()
            console.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
            console.setLevel(logging.DEBUG if verbose else logging.INFO)
            logger.addHandler(console)
        setattr(logger, "_theos_installer_configured", True)

    if log_path is None:
        return active_log_path()
    return attach_log_file(log_path)
