from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

SESSION = "session"
DIRECT = "direct"

_KNOWN_MODES = {SESSION, DIRECT}


@dataclass(frozen=True)
class LaunchPolicy:
    """Ordered launch modes for a long-running application.

    Each mode is tried at most once; a mode cannot be listed twice, so the
    number of launches is bounded by len(modes).
    """

    modes: Tuple[str, ...] = (SESSION, DIRECT)

    def __post_init__(self) -> None:
        if not self.modes:
            raise ValueError("LaunchPolicy needs at least one mode")
        unknown = [m for m in self.modes if m not in _KNOWN_MODES]
        if unknown:
            raise ValueError(f"Unknown launch mode(s): {', '.join(unknown)}")
        if len(set(self.modes)) != len(self.modes):
            raise ValueError("Launch modes must not repeat")

    @property
    def attempts(self) -> int:
        return len(self.modes)
