from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .lib.env import PATHS

DEFAULT_PACKAGES = [
    "xserver-xorg-video-dummy",
    "lxde-core",
    "lxde-common",
    "lxsession",
    "screen",
    "curl",
    "unzip",
    "wget",
    "ufw",
    "net-tools",
    "x11-utils",
]

# ufw rule syntax: port[/proto] or lo:hi/proto.
DEFAULT_FIREWALL_RULES = [
    "22/tcp",
    "47984/tcp",
    "47989/tcp",
    "48010/tcp",
    "47990/tcp",
    "47998:48002/udp",
]

SUNSHINE_URL_TEMPLATE = (
    "https://github.com/LizardByte/Sunshine/releases/download/"
    "v{version}/sunshine-ubuntu-22.04-amd64.deb"
)
CLOUDFLARED_URL = (
    "https://github.com/cloudflare/cloudflared/releases/latest/download/"
    "cloudflared-linux-amd64.deb"
)


@dataclass(frozen=True)
class ProvisionConfig:
    raw: Dict[str, Any] = field(default_factory=dict)

    def _get(self, key: str, default: Any) -> Any:
        value = self.raw.get(key)
        return default if value is None else value

    @property
    def sunshine_version(self) -> str:
        return str(self._get("sunshine_version", "0.23.1"))

    @property
    def sunshine_url(self) -> str:
        return SUNSHINE_URL_TEMPLATE.format(version=self.sunshine_version)

    @property
    def sunshine_deb(self) -> str:
        return f"/tmp/sunshine_{self.sunshine_version}.deb"

    @property
    def cloudflared_url(self) -> str:
        return str(self._get("cloudflared_url", CLOUDFLARED_URL))

    @property
    def cloudflared_deb(self) -> str:
        return "/tmp/cloudflared-linux-amd64.deb"

    @property
    def display(self) -> str:
        return str(self._get("display", ":0"))

    @property
    def packages(self) -> List[str]:
        return [str(p) for p in self._get("packages", DEFAULT_PACKAGES)]

    @property
    def firewall_rules(self) -> List[str]:
        return [str(r) for r in self._get("firewall_rules", DEFAULT_FIREWALL_RULES)]

    @property
    def cleanup_settle_seconds(self) -> float:
        return float(self._get("cleanup_settle_seconds", 1.0))

    @property
    def session_settle_seconds(self) -> float:
        return float(self._get("session_settle_seconds", 1.0))

    @property
    def poll_interval(self) -> float:
        return float(self._get("poll_interval", 0.5))

    @property
    def xserver_timeout(self) -> float:
        return float(self._get("xserver_timeout", 5.0))

    @property
    def desktop_timeout(self) -> float:
        return float(self._get("desktop_timeout", 5.0))

    @property
    def desktop_strict(self) -> bool:
        return bool(self._get("desktop_strict", True))

    @property
    def sunshine_timeout(self) -> float:
        return float(self._get("sunshine_timeout", 3.0))

    @property
    def tunnel_target(self) -> str:
        return str(self._get("tunnel_target", "https://localhost:47990"))

    @property
    def tunnel_poll_interval(self) -> float:
        return float(self._get("tunnel_poll_interval", 1.0))

    @property
    def tunnel_max_wait(self) -> float:
        return float(self._get("tunnel_max_wait", 15.0))

    @property
    def sunshine_log(self) -> str:
        return str(self._get("sunshine_log", PATHS.sunshine_log))

    @property
    def cloudflared_log(self) -> str:
        return str(self._get("cloudflared_log", PATHS.cloudflared_log))

    @property
    def log_dir(self) -> str:
        return str(self._get("log_dir", PATHS.log_dir))

    @property
    def lock_path(self) -> str:
        return str(self._get("lock_path", PATHS.lock_default))


def load_config(path: Optional[str] = None) -> ProvisionConfig:
    """Load YAML overrides; no path means built-in defaults."""

    if path is None:
        return ProvisionConfig()

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(path)

    raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path} must contain a mapping/object")

    return ProvisionConfig(raw=raw)
