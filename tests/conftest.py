import pytest
import os
import sys
import tempfile

# Add backend to sys.path
project_root = os.path.dirname(os.path.dirname(__file__))
backend_path = os.path.join(project_root, "backend")
if backend_path not in sys.path:
    sys.path.insert(0, backend_path)

from logdeck.settings import ViewerSettings
from logdeck.store import LogStore
from logdeck.workspace import Workspace


@pytest.fixture
def settings():
    return ViewerSettings()


@pytest.fixture
def store(settings):
    """Provides an empty LogStore."""
    return LogStore(settings)


@pytest.fixture
def workspace(settings):
    """Provides a clean Workspace and tears it down afterwards."""
    ws = Workspace(settings)
    yield ws
    ws.teardown()


@pytest.fixture
def bridge():
    """Provides a clean LogBridge instance."""
    from bridge import LogBridge
    b = LogBridge()
    yield b
    b.shutdown()


@pytest.fixture
def big_source_text():
    """10,000 lines, every 5th mentions ERROR."""
    lines = []
    for i in range(10000):
        level = "ERROR" if i % 5 == 0 else "INFO"
        lines.append(f"2026-02-01 10:00:{i % 60:02d} {level} worker-{i % 7} step {i}")
    return "\n".join(lines)


@pytest.fixture
def temp_log_file():
    """Creates a temporary log file and returns its path."""
    with tempfile.NamedTemporaryFile(
        mode="w", suffix=".log", delete=False, encoding="utf-8", newline=""
    ) as f:
        f.write("INFO boot\r\nERROR disk full\r\nINFO stop")
        path = f.name

    yield path

    if os.path.exists(path):
        os.remove(path)
