from __future__ import annotations

import logging

import pytest

from sunshine_provisioner.logging_utils import configure_logging


@pytest.fixture
def root_logger():
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield root
    for h in root.handlers[:]:
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


def test_logs_to_requested_file(tmp_path, root_logger):
    path = tmp_path / "logs" / "provisioner.log"

    assert configure_logging(str(path), also_console=False) == str(path)
    logging.getLogger("sunshine_provisioner.steps").info("Running step 10_install_dependencies")
    for h in root_logger.handlers:
        h.flush()

    text = path.read_text(encoding="utf-8")
    assert "Logging initialized" in text
    assert "INFO sunshine_provisioner.steps: Running step 10_install_dependencies" in text


def test_second_call_keeps_first_configuration(tmp_path, root_logger):
    first = tmp_path / "first.log"
    count = len(root_logger.handlers)

    configure_logging(str(first), also_console=False)
    assert configure_logging(str(tmp_path / "second.log")) == str(first)
    assert len(root_logger.handlers) == count + 1
    assert not (tmp_path / "second.log").exists()


def test_unwritable_path_falls_back_to_cwd(tmp_path, monkeypatch, root_logger):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    chosen = configure_logging(str(blocker / "provisioner.log"), also_console=False)

    assert chosen == str(tmp_path / "sunshine-provisioner.log")
