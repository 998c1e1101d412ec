"""Sunshine remote-desktop provisioner.

Brings an Ubuntu host from bare to streaming in one fixed sequence:
- apt dependencies, Sunshine and cloudflared packages
- firewall rules for the Sunshine ports
- a headless Xorg dummy display with an LXDE session
- Sunshine and a Cloudflare quick tunnel in detached screen sessions
"""

__version__ = "2.1.0"

__all__ = ["__version__"]
