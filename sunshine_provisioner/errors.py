from __future__ import annotations

from typing import Sequence


class ProvisionError(RuntimeError):
    """Base class for every fatal provisioning failure."""


class CommandError(ProvisionError):
    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed ({returncode}): {' '.join(self.argv)}"
        if stderr.strip():
            msg += f"\n{stderr.strip()}"
        super().__init__(msg)


class CommandNotFound(ProvisionError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"{name} not found on PATH")


class DownloadError(ProvisionError):
    pass


class PrivilegeError(ProvisionError):
    pass


class AlreadyRunning(ProvisionError):
    pass


class ReadinessTimeout(ProvisionError):
    pass


class SessionError(ProvisionError):
    pass


class ProcessNotAlive(ProvisionError):
    pass


class TunnelError(ProvisionError):
    def __init__(self, message: str, *, log_path: str) -> None:
        self.log_path = log_path
        super().__init__(f"{message}. Check: {log_path}")


class TunnelLogMissing(TunnelError):
    pass


class TunnelMarkerTimeout(TunnelError):
    pass


class TunnelUrlNotFound(TunnelError):
    pass


class StageFailure(ProvisionError):
    """A step raised; carries the step id and the original cause."""

    def __init__(self, step_id: str, cause: BaseException) -> None:
        self.step_id = step_id
        self.cause = cause
        super().__init__(f"[{step_id}] {cause}")

    @property
    def reason(self) -> str:
        return str(self.cause) or type(self.cause).__name__
