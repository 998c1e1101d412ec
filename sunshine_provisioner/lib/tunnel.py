"""Scraping the public URL out of a cloudflared quick-tunnel log.

cloudflared prints the assigned hostname inside a banner, e.g.::

    |  https://abc123.trycloudflare.com  |

There is no structured channel for it, so the log is matched against
TUNNEL_URL_RE and the first hit wins.
"""

from __future__ import annotations

import re
from typing import Optional

from ..errors import TunnelUrlNotFound

TUNNEL_MARKER = "trycloudflare.com"

# Scheme, one or more DNS labels, provider suffix. api.trycloudflare.com is the
# provisioning endpoint cloudflared names in its error lines, never a tunnel.
TUNNEL_URL_RE = re.compile(r"https://(?!api\.trycloudflare\.com)[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.trycloudflare\.com")


def has_marker(text: str) -> bool:
    return TUNNEL_MARKER in text


def find_tunnel_url(text: str) -> Optional[str]:
    m = TUNNEL_URL_RE.search(text)
    return m.group(0) if m else None


def extract_tunnel_url(text: str, *, log_path: str) -> str:
    url = find_tunnel_url(text)
    if url is None:
        reason = "Tunnel marker present but no URL found" if has_marker(text) else "Tunnel URL not found"
        raise TunnelUrlNotFound(reason, log_path=log_path)
    return url
