from __future__ import annotations

import logging
from typing import Protocol, Sequence

from .system import System, sudo

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    def fetch(self, url: str, dest: str) -> str:
        ...


def apt_update(system: System) -> None:
    sudo(system, ["apt-get", "update", "-qq"])


def apt_install(system: System, packages: Sequence[str]) -> None:
    if not packages:
        return
    sudo(system, ["apt-get", "install", "-y", *packages])


def install_deb_from_url(
    system: System,
    fetcher: Fetcher,
    *,
    binary: str,
    url: str,
    deb_path: str,
) -> bool:
    """Download a .deb and install it unless binary is already on PATH.

    Returns False when the install was skipped. The downloaded file is removed
    whether or not apt succeeds.
    """

    found = system.which(binary)
    if found:
        logger.info("%s already installed (%s)", binary, found)
        return False

    try:
        fetcher.fetch(url, deb_path)
        apt_install(system, [deb_path])
    finally:
        system.remove(deb_path)

    logger.info("%s installed from %s", binary, url)
    return True
