from __future__ import annotations

import logging
from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib.env import PATHS
from ..lib.system import sudo
from ..lib.xorg import DUMMY_CONF, EVDEV_CONF, write_root_file

logger = logging.getLogger(__name__)


class ConfigureXorgStep:
    step_id = "60_configure_xorg"
    title = "Configuring X server"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        sudo(ctx.system, ["mkdir", "-p", PATHS.xorg_conf_dir])
        write_root_file(ctx.system, PATHS.evdev_conf, EVDEV_CONF)
        write_root_file(ctx.system, PATHS.dummy_conf, DUMMY_CONF)
        logger.info("X server configured (%s)", PATHS.xorg_conf_dir)
        return state
