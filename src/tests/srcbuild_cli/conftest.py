"""Fixtures for srcbuild_cli tests."""

from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click CLI runner for testing.

    Returns
    -------
    CliRunner
        Click test runner instance
    """
    return CliRunner()


@pytest.fixture
def build_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Working directory holding ``a.src``, ``b.src`` and ``bad.src``."""
    work = tmp_path / "work"
    work.mkdir()
    (work / "a.src").write_text("a(1);  \n")
    (work / "b.src").write_text("b[2];\n")
    (work / "bad.src").write_text("function bad() {\n")
    monkeypatch.chdir(work)
    return work
