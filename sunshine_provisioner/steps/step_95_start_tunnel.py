from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..errors import TunnelLogMissing, TunnelMarkerTimeout
from ..lib.env import SESSIONS
from ..lib.tunnel import extract_tunnel_url, find_tunnel_url, has_marker
from ..state import record_decision

logger = logging.getLogger(__name__)


class StartTunnelStep:
    step_id = "95_start_tunnel"
    title = "Starting Cloudflare tunnel"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        log_path = ctx.cfg.cloudflared_log

        # A leftover log would hand back last run's hostname.
        ctx.system.remove(log_path)

        ctx.sessions.start(
            SESSIONS.cloudflared,
            ["cloudflared", "tunnel", "--no-tls-verify", "--url", ctx.cfg.tunnel_target],
            log_path=log_path,
        )

        def _url_ready() -> bool:
            text = ctx.system.read_text(log_path)
            return text is not None and find_tunnel_url(text) is not None

        ctx.wait_for(
            _url_ready,
            interval=ctx.cfg.tunnel_poll_interval,
            timeout=ctx.cfg.tunnel_max_wait,
            label="tunnel url",
        )

        text = ctx.system.read_text(log_path)
        if text is None:
            raise TunnelLogMissing("Tunnel log was never created", log_path=log_path)
        if not has_marker(text):
            raise TunnelMarkerTimeout(
                f"No tunnel hostname after {ctx.cfg.tunnel_max_wait:g}s", log_path=log_path
            )

        url = extract_tunnel_url(text, log_path=log_path)
        record_decision(state, "tunnel_url", url)
        logger.info("Tunnel established: %s", url)
        return state
