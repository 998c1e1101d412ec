from __future__ import annotations

import logging
from pathlib import Path

import httpx

from .. import __version__
from ..errors import DownloadError

logger = logging.getLogger(__name__)


def open_client() -> httpx.Client:
    timeout = httpx.Timeout(120.0, connect=15.0, read=120.0, write=120.0, pool=None)
    return httpx.Client(
        follow_redirects=True,
        timeout=timeout,
        headers={"User-Agent": f"sunshine-provisioner/{__version__}"},
    )


class Downloader:
    """Streams release artifacts to disk."""

    def __init__(self, client: httpx.Client) -> None:
        self.client = client

    def fetch(self, url: str, dest: str) -> str:
        p = Path(dest)
        p.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading %s -> %s", url, dest)
        try:
            with self.client.stream("GET", url) as resp:
                resp.raise_for_status()
                with p.open("wb") as handle:
                    for chunk in resp.iter_bytes():
                        if chunk:
                            handle.write(chunk)
        except httpx.HTTPError as exc:
            p.unlink(missing_ok=True)
            raise DownloadError(f"Failed to download {url}: {exc}") from exc
        logger.info("Saved %s (%d bytes)", dest, p.stat().st_size)
        return dest
