from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .lib.env import PATHS

DEFAULT_LOG_PATH = PATHS.log_default
FALLBACK_LOG_NAME = "sunshine-provisioner.log"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


class RunLogHandler(logging.FileHandler):
    """The per-run log file; at most one is attached to the root logger."""


def installed_run_log() -> Optional[RunLogHandler]:
    for h in logging.getLogger().handlers:
        if isinstance(h, RunLogHandler):
            return h
    return None


def _open_run_log(log_path: str) -> RunLogHandler:
    # /var/log/sunshine-setup is only writable once the run has created it
    # through sudo, so a first unprivileged run lands in the working directory.
    try:
        Path(log_path).parent.mkdir(parents=True, exist_ok=True)
        return RunLogHandler(log_path)
    except OSError:
        return RunLogHandler(str(Path.cwd() / FALLBACK_LOG_NAME))


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Attach the run log (and optionally a console handler) to the root logger.

    Call only after the privilege check: opening the file is the first write
    the provisioner makes. Repeated calls keep the first run log.

    Returns the path actually written to.
    """

    root = logging.getLogger()
    root.setLevel(level)

    existing = installed_run_log()
    if existing is not None:
        return existing.baseFilename

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    run_log = _open_run_log(log_path)
    run_log.setFormatter(fmt)
    root.addHandler(run_log)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        root.addHandler(console)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, run_log.baseFilename
    )
    return run_log.baseFilename
