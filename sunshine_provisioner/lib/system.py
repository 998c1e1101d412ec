"""Host system facade.

Everything the provisioner does to the machine goes through one object so the
steps can run against an in-memory fake. The surface is deliberately small:
run commands, spawn background children, look at the process table, touch files.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import List, Mapping, Optional, Protocol, Sequence

from .command import CmdResult, fmt_argv, run_cmd

logger = logging.getLogger(__name__)


class System(Protocol):
    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        input_text: str | None = None,
    ) -> CmdResult:
        ...

    def spawn(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        log_path: str | None = None,
    ) -> int:
        ...

    def which(self, name: str) -> Optional[str]:
        ...

    def pids(self, pattern: str, *, full: bool = False) -> List[int]:
        ...

    def kill(self, pattern: str, *, full: bool = False) -> None:
        ...

    def read_text(self, path: str) -> Optional[str]:
        ...

    def exists(self, path: str) -> bool:
        ...

    def remove(self, path: str) -> None:
        ...

    def sleep(self, seconds: float) -> None:
        ...

    def monotonic(self) -> float:
        ...

    def euid(self) -> int:
        ...


def sudo(system: System, argv: Sequence[str], *, check: bool = True, input_text: str | None = None) -> CmdResult:
    return system.run(["sudo", *argv], check=check, input_text=input_text)


class HostSystem:
    """The real machine."""

    def run(
        self,
        argv: Sequence[str],
        *,
        check: bool = True,
        env: Mapping[str, str] | None = None,
        input_text: str | None = None,
    ) -> CmdResult:
        return run_cmd(argv, check=check, env=env, input_text=input_text)

    def spawn(
        self,
        argv: Sequence[str],
        *,
        env: Mapping[str, str] | None = None,
        log_path: str | None = None,
    ) -> int:
        """Start a background child that outlives this process.

        Children are moved to their own session, except sudo: it has to stay on
        the controlling tty to reuse the cached credential or prompt for one.
        """

        argv_list = list(argv)
        detach = argv_list[0] != "sudo"
        logger.info("SPAWN %s (log=%s)", fmt_argv(argv_list), log_path or "-")

        out = open(log_path, "ab") if log_path else subprocess.DEVNULL
        try:
            p = subprocess.Popen(
                argv_list,
                stdin=subprocess.DEVNULL,
                stdout=out,
                stderr=subprocess.STDOUT,
                env=dict(os.environ, **(env or {})),
                start_new_session=detach,
            )
        finally:
            if log_path:
                out.close()
        return p.pid

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def pids(self, pattern: str, *, full: bool = False) -> List[int]:
        argv = ["pgrep", "-f" if full else "-x", pattern]
        r = run_cmd(argv, check=False)
        return [int(tok) for tok in r.stdout.split() if tok.isdigit()]

    def kill(self, pattern: str, *, full: bool = False) -> None:
        # pkill exits 1 when nothing matched; that is fine here.
        run_cmd(["sudo", "pkill", "-9", "-f" if full else "-x", pattern], check=False)

    def read_text(self, path: str) -> Optional[str]:
        p = Path(path)
        if not p.exists():
            return None
        return p.read_text(encoding="utf-8", errors="replace")

    def exists(self, path: str) -> bool:
        return Path(path).exists()

    def remove(self, path: str) -> None:
        Path(path).unlink(missing_ok=True)

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)

    def monotonic(self) -> float:
        return time.monotonic()

    def euid(self) -> int:
        return os.geteuid()
