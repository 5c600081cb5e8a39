# File: tests/conftest.py
import sys
from types import SimpleNamespace

import pytest

from mdrowser.config import BrowserConfig, CommandSpec
from mdrowser.logger import configure
from mdrowser.notify import RecordingNotifier
from mdrowser.viewer import ViewerSurface

# Stand-ins for curl and html2markdown: `python -c SCRIPT ARG`.
FETCH_OK = "import sys; print('<h1>' + sys.argv[1] + '</h1>')"
FETCH_FAIL = (
    "import sys; sys.stderr.write('curl: (6) Could not resolve host\\n'); sys.exit(6)"
)
CONVERT_OK = (
    "import sys\n"
    "data = sys.stdin.read()\n"
    "print('# converted')\n"
    "print(sys.argv[1])\n"
    "print(data.strip())\n"
)
CONVERT_EMPTY = "import sys; sys.stdin.read()"
CONVERT_FAIL = "import sys; sys.stdin.read(); sys.stderr.write('error: timeout\\n'); sys.exit(1)"
CONVERT_FAIL_SILENT = "import sys; sys.stdin.read(); sys.exit(1)"


def python_command(script: str) -> CommandSpec:
    return CommandSpec(executable=sys.executable, args=["-c", script])


@pytest.fixture()
def scripts() -> SimpleNamespace:
    """
    Python one-liners used in place of the external tools.
    """
    return SimpleNamespace(
        fetch_ok=FETCH_OK,
        fetch_fail=FETCH_FAIL,
        convert_ok=CONVERT_OK,
        convert_empty=CONVERT_EMPTY,
        convert_fail=CONVERT_FAIL,
        convert_fail_silent=CONVERT_FAIL_SILENT,
    )


@pytest.fixture()
def make_config():
    """
    Build a BrowserConfig whose fetcher and converter are Python scripts.
    """
    def _make(fetch: str = FETCH_OK, convert: str = CONVERT_OK, **overrides) -> BrowserConfig:
        return BrowserConfig(
            fetcher=python_command(fetch),
            converter=python_command(convert),
            **overrides,
        )

    return _make


@pytest.fixture()
def config_dict():
    """
    Same as make_config, but as a plain dict for writing config files.
    """
    def _make(fetch: str = FETCH_OK, convert: str = CONVERT_OK) -> dict:
        return {
            "fetcher": {"executable": sys.executable, "args": ["-c", fetch]},
            "converter": {"executable": sys.executable, "args": ["-c", convert]},
        }

    return _make


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def surface() -> ViewerSurface:
    return ViewerSurface()


@pytest.fixture(autouse=True)
def reset_logging():
    """
    CLI tests rebind the logger to CliRunner streams; restore it afterwards.
    """
    yield
    configure()
