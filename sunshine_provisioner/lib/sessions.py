from __future__ import annotations

import logging
import re
import shlex
from typing import Mapping, Sequence

from .system import System

logger = logging.getLogger(__name__)


def session_command(
    command: Sequence[str],
    *,
    env: Mapping[str, str] | None = None,
    log_path: str | None = None,
) -> str:
    """Render the shell line a screen session runs."""

    parts = [f"{k}={shlex.quote(v)}" for k, v in (env or {}).items()]
    parts.append(" ".join(shlex.quote(a) for a in command))
    line = " ".join(parts)
    if log_path:
        line += f" > {shlex.quote(log_path)} 2>&1"
    return line


class ScreenSessions:
    """Named detached sessions backed by GNU screen."""

    def __init__(self, system: System) -> None:
        self.system = system

    def start(
        self,
        name: str,
        command: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        log_path: str | None = None,
    ) -> None:
        # One live session per name.
        self.terminate(name)
        line = session_command(command, env=env, log_path=log_path)
        logger.info("Starting screen session %s: %s", name, line)
        self.system.run(["screen", "-dmS", name, "bash", "-c", line])

    def listing(self) -> str:
        # screen -ls exits non-zero both with and without sessions.
        r = self.system.run(["screen", "-ls"], check=False)
        return r.stdout

    def exists(self, name: str) -> bool:
        pattern = re.compile(rf"^\s*\d+\.{re.escape(name)}\s", re.MULTILINE)
        return bool(pattern.search(self.listing()))

    def terminate(self, name: str) -> None:
        self.system.run(["screen", "-S", name, "-X", "quit"], check=False)
