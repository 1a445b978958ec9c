from __future__ import annotations

import sys
from pathlib import Path

import pytest

_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from FPT.config import Config, config  # noqa: E402
from FPT.debug.debug_manager import DebugManager, set_debug  # noqa: E402


@pytest.fixture(autouse=True)
def default_config():
    for name, config_type in Config._subconfigs.items():
        setattr(config, name, config_type())
    yield config
    for name, config_type in Config._subconfigs.items():
        setattr(config, name, config_type())


@pytest.fixture(autouse=True)
def quiet_debug(tmp_path):
    manager = DebugManager(log_file=str(tmp_path / "debug_log.txt"), auto_save_logs=False, echo=False)
    set_debug(manager)
    yield manager
    set_debug(None)


class RecordingSurface:
    """Drawing surface double that records every primitive call."""

    def __init__(self):
        self.antialias = None
        self.calls = []

    def line(self, start, end, color):
        self.calls.append(("line", start, end, color))

    def polyline(self, points, color):
        self.calls.append(("polyline", tuple(points), color))

    def circle(self, center, radius, color, filled=True):
        self.calls.append(("circle", center, radius, color, filled))

    def text(self, position, text, color):
        self.calls.append(("text", position, text, color))


@pytest.fixture
def surface():
    return RecordingSurface()
