from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .config import ProvisionConfig
from .lib.pkg import Fetcher
from .lib.sessions import ScreenSessions
from .lib.system import System
from .lib.wait import await_condition


@dataclass(frozen=True)
class ProvisionCtx:
    cfg: ProvisionConfig
    system: System
    sessions: ScreenSessions
    fetcher: Fetcher

    @property
    def display_env(self) -> dict[str, str]:
        return {"DISPLAY": self.cfg.display}

    def wait_for(
        self,
        predicate: Callable[[], bool],
        *,
        timeout: float,
        interval: float | None = None,
        label: str = "condition",
    ) -> bool:
        return await_condition(
            predicate,
            interval=interval if interval is not None else self.cfg.poll_interval,
            timeout=timeout,
            sleep=self.system.sleep,
            clock=self.system.monotonic,
            label=label,
        )
