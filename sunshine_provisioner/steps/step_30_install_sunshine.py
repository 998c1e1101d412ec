from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib.pkg import install_deb_from_url
from ..state import record_decision

logger = logging.getLogger(__name__)


class InstallSunshineStep:
    step_id = "30_install_sunshine"
    title = "Installing Sunshine"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        installed = install_deb_from_url(
            ctx.system,
            ctx.fetcher,
            binary="sunshine",
            url=ctx.cfg.sunshine_url,
            deb_path=ctx.cfg.sunshine_deb,
        )
        record_decision(state, "sunshine_installed", "installed" if installed else "already installed")
        if installed:
            logger.info("Sunshine v%s installed", ctx.cfg.sunshine_version)
        return state
