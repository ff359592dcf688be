"""Root pytest configuration and shared fixtures for the srcbuild test suite."""

import logging
import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from srcbuild_cli.core.constants import LOGGING_PACKAGES  # noqa: E402
from srcbuild_common.config.runtime import ConfigManager  # noqa: E402
from srcbuild_common.constants import EnvVars  # noqa: E402


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: fast isolated unit tests")
    config.addinivalue_line(
        "markers",
        "integration: tests that run the full build against a temporary tree",
    )


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[None, None, None]:
    """Isolate each test from user config, SRCBUILD_* variables and loggers.

    Yields
    ------
    None
        Control returns to test after setup
    """
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    for name in (EnvVars.RUNTIME, EnvVars.LOG_LEVEL, EnvVars.LOG_FILE, EnvVars.ENGINE):
        monkeypatch.delenv(name, raising=False)
    ConfigManager.reset()

    yield

    ConfigManager.reset()
    for pkg_name in LOGGING_PACKAGES:
        pkg_logger = logging.getLogger(pkg_name)
        for handler in list(pkg_logger.handlers):
            pkg_logger.removeHandler(handler)
            handler.close()
        pkg_logger.propagate = True
        pkg_logger.setLevel(logging.NOTSET)
