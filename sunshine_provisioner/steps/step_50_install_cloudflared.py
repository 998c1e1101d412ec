from __future__ import annotations

from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib.pkg import install_deb_from_url
from ..state import record_decision


class InstallCloudflaredStep:
    step_id = "50_install_cloudflared"
    title = "Installing cloudflared"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        installed = install_deb_from_url(
            ctx.system,
            ctx.fetcher,
            binary="cloudflared",
            url=ctx.cfg.cloudflared_url,
            deb_path=ctx.cfg.cloudflared_deb,
        )
        record_decision(state, "cloudflared_installed", "installed" if installed else "already installed")
        return state
