from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..errors import ReadinessTimeout
from ..lib.env import PATHS
from ..lib.system import sudo
from ..lib.xorg import xorg_argv
from ..state import record_decision

logger = logging.getLogger(__name__)


class StartXServerStep:
    """NotStarted -> Starting (spawned) -> Ready (xdpyinfo answers) | Failed."""

    step_id = "70_start_xserver"
    title = "Starting X server"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        display = ctx.cfg.display
        argv = xorg_argv(display, config=PATHS.dummy_conf, config_dir=PATHS.xorg_conf_dir)

        # Authenticate in the foreground; the background sudo then reuses it.
        sudo(ctx.system, ["-v"])

        record_decision(state, "xserver", "starting")
        ctx.system.spawn(argv)

        def _ready() -> bool:
            return ctx.system.run(["xdpyinfo", "-display", display], check=False).ok

        if not ctx.wait_for(_ready, timeout=ctx.cfg.xserver_timeout, label="xdpyinfo"):
            record_decision(state, "xserver", "failed")
            raise ReadinessTimeout(
                f"X server on {display} did not answer xdpyinfo within {ctx.cfg.xserver_timeout:g}s"
            )

        record_decision(state, "xserver", "ready")
        logger.info("X server running on %s", display)
        return state
