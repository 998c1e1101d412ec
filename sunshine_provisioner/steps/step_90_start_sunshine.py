from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..context import ProvisionCtx
from ..errors import CommandNotFound, ProcessNotAlive, SessionError
from ..lib.env import SESSIONS
from ..lib.launch import DIRECT, SESSION, LaunchPolicy
from ..state import record_decision

logger = logging.getLogger(__name__)

SUNSHINE = "sunshine"
LOG_TAIL_LINES = 20


def _tail(text: Optional[str], lines: int = LOG_TAIL_LINES) -> str:
    if not text:
        return "(empty)"
    return "\n".join(text.rstrip().splitlines()[-lines:])


class StartSunshineStep:
    """Start Sunshine and verify the process, not just its session.

    A screen session can come up while the program inside it exits at once
    (missing display permissions, for example), so liveness is checked
    against the process table. If the session launch leaves no process,
    Sunshine is started once more outside screen.
    """

    step_id = "90_start_sunshine"
    title = "Starting Sunshine server"

    def __init__(self, policy: Optional[LaunchPolicy] = None) -> None:
        self.policy = policy or LaunchPolicy()

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ctx.sessions.terminate(SESSIONS.sunshine)
        ctx.system.sleep(ctx.cfg.session_settle_seconds)

        if not ctx.system.which(SUNSHINE):
            raise CommandNotFound(SUNSHINE)

        launchers = {SESSION: self._launch_in_session, DIRECT: self._launch_direct}

        for attempt, mode in enumerate(self.policy.modes, start=1):
            if attempt > 1:
                logger.warning("Sunshine not running after %s launch; trying %s launch", self.policy.modes[attempt - 2], mode)
            launchers[mode](ctx)

            pid = self._await_pid(ctx)
            if pid is not None:
                record_decision(state, "sunshine_pid", pid)
                record_decision(state, "sunshine_launch_mode", mode)
                logger.info("Sunshine running (pid=%s, mode=%s)", pid, mode)
                return state

        log = ctx.system.read_text(ctx.cfg.sunshine_log)
        raise ProcessNotAlive(
            f"Sunshine process not running after {self.policy.attempts} launch attempt(s). "
            f"Log {ctx.cfg.sunshine_log}:\n{_tail(log)}"
        )

    def _launch_in_session(self, ctx: ProvisionCtx) -> None:
        ctx.sessions.start(
            SESSIONS.sunshine,
            [SUNSHINE],
            env=ctx.display_env,
            log_path=ctx.cfg.sunshine_log,
        )
        up = ctx.wait_for(
            lambda: ctx.sessions.exists(SESSIONS.sunshine),
            timeout=ctx.cfg.sunshine_timeout,
            label="sunshine session",
        )
        if not up:
            listing = ctx.sessions.listing().strip() or "(no sessions)"
            log = ctx.system.read_text(ctx.cfg.sunshine_log)
            raise SessionError(
                f"screen session '{SESSIONS.sunshine}' did not start.\n"
                f"screen -ls:\n{listing}\n"
                f"Log {ctx.cfg.sunshine_log}:\n{_tail(log)}"
            )

    def _launch_direct(self, ctx: ProvisionCtx) -> None:
        ctx.system.spawn([SUNSHINE], env=ctx.display_env, log_path=ctx.cfg.sunshine_log)

    def _await_pid(self, ctx: ProvisionCtx) -> Optional[int]:
        found: list[int] = []

        def _alive() -> bool:
            found[:] = ctx.system.pids(SUNSHINE)
            return bool(found)

        if ctx.wait_for(_alive, timeout=ctx.cfg.sunshine_timeout, label="sunshine process"):
            return found[0]
        return None
