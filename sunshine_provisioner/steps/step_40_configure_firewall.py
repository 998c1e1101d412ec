from __future__ import annotations

from typing import Any, Dict

from ..context import ProvisionCtx
from ..lib.firewall import apply_rules
from ..state import record_decision


class ConfigureFirewallStep:
    step_id = "40_configure_firewall"
    title = "Configuring firewall"

    def run(self, ctx: ProvisionCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        applied = apply_rules(ctx.system, ctx.cfg.firewall_rules)
        record_decision(state, "firewall_rules", applied)
        return state
