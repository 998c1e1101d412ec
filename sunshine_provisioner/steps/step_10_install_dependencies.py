from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib.pkg import apt_install, apt_update
from ..state import record_decision

logger = logging.getLogger(__name__)


class InstallDependenciesStep:
    step_id = "10_install_dependencies"
    title = "Installing system dependencies"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        packages = ctx.cfg.packages

        apt_update(ctx.system)
        apt_install(ctx.system, packages)

        record_decision(state, "packages", packages)
        logger.info("Dependencies installed (%d packages)", len(packages))
        return state
