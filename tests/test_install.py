from __future__ import annotations

import pytest

from sunshine_provisioner.errors import CommandError, DownloadError
from sunshine_provisioner.state import new_state
from sunshine_provisioner.steps import InstallCloudflaredStep, InstallDependenciesStep, InstallSunshineStep

SUNSHINE_DEB = "/tmp/sunshine_0.23.1.deb"
SUNSHINE_URL = "https://github.com/LizardByte/Sunshine/releases/download/v0.23.1/sunshine-ubuntu-22.04-amd64.deb"


def test_already_installed_skips_download_and_apt(ctx, system, fetcher):
    system.binaries["sunshine"] = "/usr/bin/sunshine"

    state = InstallSunshineStep().run(ctx, new_state())

    assert fetcher.fetched == []
    assert not system.ran(["sudo", "apt-get"])
    assert state["decisions"]["sunshine_installed"] == "already installed"


def test_download_then_install_then_remove(ctx, system, fetcher):
    state = InstallSunshineStep().run(ctx, new_state())

    assert fetcher.fetched == [(SUNSHINE_URL, SUNSHINE_DEB)]
    assert ["sudo", "apt-get", "install", "-y", SUNSHINE_DEB] in system.commands
    assert SUNSHINE_DEB not in system.files
    assert state["decisions"]["sunshine_installed"] == "installed"


def test_temp_file_removed_when_apt_fails(ctx, system):
    system.fail_when(["sudo", "apt-get", "install"], returncode=100, stderr="E: broken")

    with pytest.raises(CommandError) as exc:
        InstallSunshineStep().run(ctx, new_state())

    assert exc.value.returncode == 100
    assert SUNSHINE_DEB in system.removed
    assert SUNSHINE_DEB not in system.files


def test_download_failure_skips_apt(ctx, system, fetcher):
    fetcher.fail_urls.add(SUNSHINE_URL)

    with pytest.raises(DownloadError):
        InstallSunshineStep().run(ctx, new_state())

    assert not system.ran(["sudo", "apt-get"])
    assert SUNSHINE_DEB in system.removed


def test_sunshine_version_drives_url(make_ctx, fetcher):
    InstallSunshineStep().run(make_ctx(sunshine_version="0.22.0"), new_state())
    url, dest = fetcher.fetched[0]
    assert "/v0.22.0/" in url
    assert dest == "/tmp/sunshine_0.22.0.deb"


def test_cloudflared_install(ctx, system, fetcher):
    InstallCloudflaredStep().run(ctx, new_state())
    url, dest = fetcher.fetched[0]
    assert url.endswith("/cloudflared-linux-amd64.deb")
    assert ["sudo", "apt-get", "install", "-y", dest] in system.commands


def test_dependencies_installed_in_one_apt_call(ctx, system):
    InstallDependenciesStep().run(ctx, new_state())

    assert system.commands[0] == ["sudo", "apt-get", "update", "-qq"]
    install = system.commands[1]
    assert install[:4] == ["sudo", "apt-get", "install", "-y"]
    assert "xserver-xorg-video-dummy" in install
    assert "screen" in install


def test_dependency_failure_is_fatal_and_not_retried(ctx, system):
    system.fail_when(["sudo", "apt-get", "install"], returncode=100)

    with pytest.raises(CommandError):
        InstallDependenciesStep().run(ctx, new_state())

    installs = [c for c in system.commands if c[:3] == ["sudo", "apt-get", "install"]]
    assert len(installs) == 1
