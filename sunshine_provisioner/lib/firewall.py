from __future__ import annotations

import logging
from typing import Iterable

from .system import System, sudo

logger = logging.getLogger(__name__)


def ufw_allow(system: System, rule: str) -> None:
    sudo(system, ["ufw", "allow", rule])


def ufw_enable(system: System) -> None:
    sudo(system, ["ufw", "--force", "enable"])


def apply_rules(system: System, rules: Iterable[str]) -> list[str]:
    """Allow every rule, then enable enforcement. Any failure is fatal."""

    applied: list[str] = []
    for rule in rules:
        ufw_allow(system, rule)
        applied.append(rule)
    ufw_enable(system)
    logger.info("Firewall enabled with %d rule(s): %s", len(applied), " ".join(applied))
    return applied
