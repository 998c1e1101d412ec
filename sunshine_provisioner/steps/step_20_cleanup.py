from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib.env import SESSIONS

logger = logging.getLogger(__name__)

STALE_PROCESSES = ("sunshine", "cloudflared", "lxsession", "lxpanel", "openbox")


def xserver_patterns(display: str) -> tuple[str, ...]:
    return (f"Xorg {display}", "Xorg.*vt7")


class CleanupStep:
    """Bring processes and sessions back to an empty baseline.

    Everything here is best-effort: nothing to kill is the normal case on a
    fresh machine.
    """

    step_id = "20_cleanup"
    title = "Cleaning existing processes"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        system = ctx.system

        for name in STALE_PROCESSES:
            system.kill(name)

        # A leaked X server keeps the display number bound.
        for pattern in xserver_patterns(ctx.cfg.display):
            system.kill(pattern, full=True)

        for session in (SESSIONS.sunshine, SESSIONS.cloudflared):
            ctx.sessions.terminate(session)

        system.sleep(ctx.cfg.cleanup_settle_seconds)
        logger.info("Cleanup completed")
        return state
