from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..errors import ProcessNotAlive
from ..state import record_decision

logger = logging.getLogger(__name__)

DESKTOP_PROCESS = "lxsession"


class StartDesktopStep:
    step_id = "80_start_desktop"
    title = "Starting LXDE desktop"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ctx.system.spawn([DESKTOP_PROCESS], env=ctx.display_env)

        alive = ctx.wait_for(
            lambda: bool(ctx.system.pids(DESKTOP_PROCESS)),
            timeout=ctx.cfg.desktop_timeout,
            label=DESKTOP_PROCESS,
        )
        record_decision(state, "desktop_alive", alive)

        if not alive:
            if ctx.cfg.desktop_strict:
                raise ProcessNotAlive(f"{DESKTOP_PROCESS} is not running on {ctx.cfg.display}")
            logger.warning("%s not detected on %s; continuing (desktop_strict=false)", DESKTOP_PROCESS, ctx.cfg.display)
            return state

        logger.info("LXDE started on %s", ctx.cfg.display)
        return state
