"""Test configuration and fixtures for peek tests."""

import pytest
import pexpect
import os
import sys
import tempfile
import shutil

# Add parent directory to path
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

from peek import (
    TextSource, TextSink, LoadFailure, ExportFailure,
    KIND_FILE, KIND_STDIN, KIND_PROCESS, KIND_NETWORK, KIND_SQL,
)


PEEK = os.path.join(ROOT, "peek.py")


class CannedSource(TextSource):
    """Returns prepared lines per target instead of touching the system."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.calls = []

    def fetch(self, target):
        self.calls.append(target)
        if target not in self.data:
            raise LoadFailure("Failed to load %s" % (target,))
        return list(self.data[target])


class RecordingSink(TextSink):

    def __init__(self):
        self.sent = []

    def send(self, text):
        self.sent.append(text)


class FailingSink(TextSink):

    def send(self, text):
        raise ExportFailure("No clipboard tool available")


@pytest.fixture
def canned_sources():
    """One CannedSource per buffer kind; tests fill in ``.data``."""
    return {
        KIND_FILE: CannedSource(),
        KIND_STDIN: CannedSource(),
        KIND_PROCESS: CannedSource(),
        KIND_NETWORK: CannedSource(),
        KIND_SQL: CannedSource(),
    }


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def failing_sink():
    return FailingSink()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a real user config from leaking into tests."""
    monkeypatch.setenv("PEEK_CONFIG", str(tmp_path / "no-such-config.json"))


@pytest.fixture(scope="session")
def sample_files():
    """A few small files to open in the viewer."""
    test_dir = tempfile.mkdtemp()
    files = {
        "sample.py": (
            "import os\n"
            "\n"
            "def main():\n"
            "    # print the cwd\n"
            "    print(os.getcwd(), 'done')\n"
        ),
        "notes.txt": "".join("note line %d\n" % i for i in range(1, 61)),
        "empty.txt": "",
    }
    paths = {}
    for name, content in files.items():
        path = os.path.join(test_dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        paths[name] = path

    yield paths

    # Cleanup
    shutil.rmtree(test_dir)


def spawn_peek(*args, dimensions=(24, 80)):
    env = dict(os.environ)
    env["TERM"] = "xterm"
    env["PEEK_CONFIG"] = os.devnull
    return pexpect.spawn(sys.executable, [PEEK] + list(args), timeout=10,
                         env=env, dimensions=dimensions)


@pytest.fixture
def peek_process(sample_files):
    """Start a peek process on the sample python file."""
    proc = spawn_peek(sample_files["sample.py"])

    yield proc

    # Cleanup
    if proc.isalive():
        proc.terminate(force=True)
