from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional, Sequence, TextIO

from .config import load_config
from .context import ProvisionCtx
from .errors import PrivilegeError, ProvisionError, StageFailure
from .lib.download import Downloader, open_client
from .lib.env import SESSIONS
from .lib.lock import SingleInstanceLock
from .lib.sessions import ScreenSessions
from .lib.system import HostSystem, System, sudo
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import Step, run_pipeline
from .state import new_state
from .steps import (
    CleanupStep,
    ConfigureFirewallStep,
    ConfigureXorgStep,
    InstallCloudflaredStep,
    InstallDependenciesStep,
    InstallSunshineStep,
    StartDesktopStep,
    StartSunshineStep,
    StartTunnelStep,
    StartXServerStep,
)

logger = logging.getLogger(__name__)


def build_steps() -> list[Step]:
    return [
        InstallDependenciesStep(),
        CleanupStep(),
        InstallSunshineStep(),
        ConfigureFirewallStep(),
        InstallCloudflaredStep(),
        ConfigureXorgStep(),
        StartXServerStep(),
        StartDesktopStep(),
        StartSunshineStep(),
        StartTunnelStep(),
    ]


def check_privileges(system: System) -> None:
    if system.euid() == 0:
        raise PrivilegeError("Do not run as root. Use a normal user with sudo privileges.")
    if not system.which("sudo"):
        raise PrivilegeError("sudo not found on PATH; a user with sudo privileges is required.")


def render_summary(state: Dict[str, Any]) -> str:
    decisions = state.get("decisions") or {}
    url = decisions.get("tunnel_url") or "(unavailable)"
    rule = "=" * 64
    lines = [
        "",
        rule,
        "PUBLIC ACCESS URL".center(64),
        rule,
        f"  {url}",
        rule,
        "",
        "SETUP COMPLETED",
        "",
        "Quick Access Commands:",
        f"  screen -r {SESSIONS.sunshine:<14} - View Sunshine logs",
        f"  screen -r {SESSIONS.cloudflared:<14} - View Cloudflared logs",
        f"  {'Ctrl+A then D':<24} - Exit screen session",
        "",
        "Next Steps:",
        "  1. Open the tunnel URL in your browser",
        "  2. Complete Sunshine initial setup",
        "  3. Connect using Moonlight client",
        "",
    ]
    pid = decisions.get("sunshine_pid")
    if pid is not None:
        lines.insert(-1, f"Sunshine pid {pid} ({decisions.get('sunshine_launch_mode')} launch)")
    return "\n".join(lines)


def run(
    ctx: ProvisionCtx,
    *,
    steps: Optional[Sequence[Step]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    """Run the full provisioning sequence; returns the process exit code."""

    out = out or sys.stdout
    err = err or sys.stderr

    try:
        # Must hold before any side effect, the lock file included.
        check_privileges(ctx.system)

        with SingleInstanceLock(ctx.cfg.lock_path):
            sudo(ctx.system, ["mkdir", "-p", ctx.cfg.log_dir], check=False)
            result = run_pipeline(
                ctx=ctx,
                state=new_state(),
                steps=build_steps() if steps is None else steps,
            )
    except StageFailure as e:
        print(f"✗ [{e.step_id}] {e.reason}", file=err)
        return 1
    except ProvisionError as e:
        logger.error("%s", e)
        print(f"✗ {e}", file=err)
        return 1

    print(render_summary(result.state), file=out)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="sunshine-provisioner",
        description="Install Sunshine on a headless Xorg display and expose it through a Cloudflare tunnel.",
    )
    p.add_argument("--config", default=None, help="YAML file overriding the built-in settings")
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to provisioner log")

    args = p.parse_args(argv)
    system = HostSystem()

    # Nothing is written, the log file included, until this passes.
    try:
        check_privileges(system)
    except PrivilegeError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    configure_logging(log_path=args.log)

    try:
        cfg = load_config(args.config)
        with open_client() as client:
            ctx = ProvisionCtx(
                cfg=cfg,
                system=system,
                sessions=ScreenSessions(system),
                fetcher=Downloader(client),
            )
            return run(ctx)
    except Exception:
        logger.exception("Provisioner failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
