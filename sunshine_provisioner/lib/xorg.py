from __future__ import annotations

import logging

from .system import System, sudo

logger = logging.getLogger(__name__)


EVDEV_CONF = """\
Section "InputDevice"
    Identifier "Dummy Mouse"
    Driver "evdev"
    Option "Device" "/dev/uinput"
    Option "Emulate3Buttons" "true"
    Option "EmulateWheel" "true"
    Option "ZAxisMapping" "4 5"
EndSection

Section "InputDevice"
    Identifier "Dummy Keyboard"
    Driver "evdev"
    Option "Device" "/dev/uinput"
EndSection
"""

DUMMY_CONF = """\
Section "Monitor"
    Identifier "DummyMonitor"
    HorizSync 28.0-80.0
    VertRefresh 48.0-75.0
    Option "DPMS"
    Modeline "1920x1080" 148.50 1920 2008 2052 2200 1080 1084 1089 1125 +hsync +vsync
EndSection

Section "Device"
    Identifier "DummyDevice"
    Driver "dummy"
    VideoRam 256000
EndSection

Section "Screen"
    Identifier "DummyScreen"
    Device "DummyDevice"
    Monitor "DummyMonitor"
    DefaultDepth 24
    SubSection "Display"
        Depth 24
        Modes "1920x1080"
    EndSubSection
EndSection
"""


def write_root_file(system: System, path: str, contents: str) -> None:
    # tee writes as root; its stdout echo is captured and discarded.
    sudo(system, ["tee", path], input_text=contents)
    logger.info("Wrote %s (%d bytes)", path, len(contents))


def xorg_argv(display: str, *, config: str, config_dir: str, vt: str = "vt7") -> list[str]:
    return ["sudo", "Xorg", display, "-config", config, "-configdir", config_dir, vt]
