from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sunshine_provisioner.config import ProvisionConfig  # noqa: E402
from sunshine_provisioner.context import ProvisionCtx  # noqa: E402
from sunshine_provisioner.errors import CommandError, DownloadError  # noqa: E402
from sunshine_provisioner.lib.command import CmdResult  # noqa: E402

Responder = Callable[[List[str]], Optional[CmdResult]]


class FakeSystem:
    """In-memory host: commands, process table, files and a virtual clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.commands: List[List[str]] = []
        self.inputs: Dict[str, str] = {}
        self.spawned: List[Tuple[List[str], Dict[str, str], Optional[str]]] = []
        self.binaries: Dict[str, str] = {"sudo": "/usr/bin/sudo"}
        self.processes: Dict[str, List[int]] = {}
        self.files: Dict[str, str] = {}
        self.killed: List[Tuple[str, bool]] = []
        self.removed: List[str] = []
        self.sleeps: List[float] = []
        self.euid_value = 1000
        self.responders: List[Responder] = []
        self.spawn_hooks: List[Callable[[List[str]], None]] = []
        self._timers: List[Tuple[float, Callable[[], None]]] = []
        self._next_pid = 4000

    # -- facade --------------------------------------------------------

    def run(self, argv, *, check=True, env=None, input_text=None) -> CmdResult:
        argv = list(argv)
        self.commands.append(argv)
        if input_text is not None:
            self.inputs[argv[-1]] = input_text
        result = CmdResult(argv=argv, returncode=0, stdout="", stderr="")
        for responder in self.responders:
            got = responder(argv)
            if got is not None:
                result = got
                break
        if check and result.returncode != 0:
            raise CommandError(argv, result.returncode, result.stderr)
        return result

    def spawn(self, argv, *, env=None, log_path=None) -> int:
        argv = list(argv)
        self.spawned.append((argv, dict(env or {}), log_path))
        for hook in self.spawn_hooks:
            hook(argv)
        return self._alloc_pid()

    def which(self, name: str) -> Optional[str]:
        return self.binaries.get(name)

    def pids(self, pattern: str, *, full: bool = False) -> List[int]:
        return list(self.processes.get(pattern, []))

    def kill(self, pattern: str, *, full: bool = False) -> None:
        self.killed.append((pattern, full))
        self.processes.pop(pattern, None)

    def read_text(self, path: str) -> Optional[str]:
        return self.files.get(path)

    def exists(self, path: str) -> bool:
        return path in self.files

    def remove(self, path: str) -> None:
        self.removed.append(path)
        self.files.pop(path, None)

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds
        due = [t for t in self._timers if t[0] <= self.now]
        self._timers = [t for t in self._timers if t[0] > self.now]
        for _, fn in due:
            fn()

    def monotonic(self) -> float:
        return self.now

    def euid(self) -> int:
        return self.euid_value

    # -- test helpers --------------------------------------------------

    def _alloc_pid(self) -> int:
        self._next_pid += 1
        return self._next_pid

    def start_process(self, name: str) -> int:
        pid = self._alloc_pid()
        self.processes.setdefault(name, []).append(pid)
        return pid

    def call_later(self, delay: float, fn: Callable[[], None]) -> None:
        self._timers.append((self.now + delay, fn))

    def fail_when(self, prefix: List[str], returncode: int = 1, stderr: str = "boom") -> None:
        def responder(argv: List[str]) -> Optional[CmdResult]:
            if argv[: len(prefix)] == prefix:
                return CmdResult(argv=argv, returncode=returncode, stdout="", stderr=stderr)
            return None

        self.responders.append(responder)

    def ran(self, prefix: List[str]) -> bool:
        return any(argv[: len(prefix)] == prefix for argv in self.commands)


class FakeSessions:
    def __init__(self) -> None:
        self.live: Dict[str, List[str]] = {}
        self.started: List[Tuple[str, List[str], Dict[str, str], Optional[str]]] = []
        self.terminated: List[str] = []
        self.on_start: Dict[str, Callable[[], None]] = {}
        self.refuse: set[str] = set()

    def start(self, name, command, *, env=None, log_path=None) -> None:
        self.terminate(name)
        self.started.append((name, list(command), dict(env or {}), log_path))
        if name not in self.refuse:
            self.live[name] = list(command)
        hook = self.on_start.get(name)
        if hook:
            hook()

    def exists(self, name: str) -> bool:
        return name in self.live

    def terminate(self, name: str) -> None:
        self.terminated.append(name)
        self.live.pop(name, None)

    def listing(self) -> str:
        if not self.live:
            return "No Sockets found in /run/screen/S-user.\n"
        rows = [f"\t{3000 + i}.{name}\t(Detached)" for i, name in enumerate(self.live)]
        return "There are screens on:\n" + "\n".join(rows) + "\n"


class FakeFetcher:
    def __init__(self, system: FakeSystem) -> None:
        self.system = system
        self.fetched: List[Tuple[str, str]] = []
        self.fail_urls: set[str] = set()

    def fetch(self, url: str, dest: str) -> str:
        self.fetched.append((url, dest))
        if url in self.fail_urls:
            raise DownloadError(f"Failed to download {url}: connection refused")
        self.system.files[dest] = "deb"
        return dest


@pytest.fixture
def system() -> FakeSystem:
    return FakeSystem()


@pytest.fixture
def sessions() -> FakeSessions:
    return FakeSessions()


@pytest.fixture
def fetcher(system: FakeSystem) -> FakeFetcher:
    return FakeFetcher(system)


@pytest.fixture
def make_ctx(tmp_path, system, sessions, fetcher):
    def _make(**overrides) -> ProvisionCtx:
        raw = {"lock_path": str(tmp_path / "provisioner.lock")}
        raw.update(overrides)
        return ProvisionCtx(
            cfg=ProvisionConfig(raw=raw),
            system=system,
            sessions=sessions,
            fetcher=fetcher,
        )

    return _make


@pytest.fixture
def ctx(make_ctx) -> ProvisionCtx:
    return make_ctx()
