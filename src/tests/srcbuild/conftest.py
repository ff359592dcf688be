"""Fixtures for srcbuild core tests."""

from pathlib import Path

import pytest

from srcbuild.runtime import EmulatedRuntime, NativeRuntime, RuntimeProvider


@pytest.fixture(params=["native", "emulated"])
def runtime(request: pytest.FixtureRequest) -> RuntimeProvider:
    """Provide each runtime provider in turn.

    Parameters
    ----------
    request : pytest.FixtureRequest
        Carries the provider name

    Returns
    -------
    RuntimeProvider
        Fresh provider with its own module cache
    """
    if request.param == "native":
        return NativeRuntime()
    return EmulatedRuntime()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    """Create a small tree of source files.

    Returns
    -------
    Path
        Directory holding ``a.js``, ``b.js`` and ``bad.js``
    """
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.js").write_text("function a() {\n  return [1, 2];   \n}\n")
    (src / "b.js").write_text("const b = { x: (1) };\t\r\n")
    (src / "bad.js").write_text("function bad() {\n  return (1;\n")
    return src


@pytest.fixture
def module_dir(tmp_path: Path) -> Path:
    """Directory for modules loaded by the module loader."""
    mods = tmp_path / "mods"
    mods.mkdir()
    return mods
