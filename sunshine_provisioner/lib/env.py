from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    xorg_conf_dir: str = "/etc/X11/xorg.conf.d"
    evdev_conf: str = "/etc/X11/xorg.conf.d/10-evdev.conf"
    dummy_conf: str = "/etc/X11/xorg.conf.d/10-dummy.conf"
    log_dir: str = "/var/log/sunshine-setup"
    log_default: str = "/var/log/sunshine-setup/provisioner.log"
    sunshine_log: str = "/tmp/sunshine.log"
    cloudflared_log: str = "/tmp/cloudflared.log"
    lock_default: str = "/tmp/sunshine-provisioner.lock"


@dataclass(frozen=True)
class Sessions:
    sunshine: str = "sunshine"
    cloudflared: str = "cloudflared"


PATHS = Paths()
SESSIONS = Sessions()
