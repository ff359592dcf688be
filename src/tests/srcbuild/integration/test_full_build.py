"""End-to-end build runs on both runtime providers."""

from pathlib import Path

import pytest

from srcbuild.driver import BuildDriver, format_dependencies
from srcbuild.errors import TransformError
from srcbuild.settings import load_settings


def _write_sources(root: Path, count: int) -> list[str]:
    paths = []
    for i in range(count):
        src = root / f"mod{i}.js"
        src.write_text(f"export const v{i} = [{i}];   \n")
        paths.append(str(src))
    return paths


@pytest.mark.integration
class TestBuildProperties:
    """Properties that hold for any valid invocation."""

    @pytest.mark.parametrize("count", [0, 1, 3])
    def test_one_output_per_input(self, runtime, tmp_path: Path, count: int):
        """Test directory creation, output count and dependency length."""
        src_root = tmp_path / "src"
        src_root.mkdir()
        inputs = _write_sources(src_root, count)
        out = tmp_path / "build" / "gen" / "out"

        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)
        result = driver.run(["exe", driver.script_path, *inputs, str(out)])

        assert out.is_dir()
        assert sorted(p.name for p in out.iterdir()) == sorted(
            Path(p).name for p in inputs
        )
        assert len(result.dependencies) == count + 2
        assert result.dependencies[:2] == [
            driver.script_path,
            driver.config_module_path,
        ]
        assert result.dependencies[2:] == inputs

    def test_rerun_into_existing_directory(self, runtime, tmp_path: Path):
        """Test that building twice into the same directory succeeds."""
        inputs = _write_sources(tmp_path, 2)
        out = str(tmp_path / "out")
        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)

        first = driver.run(["exe", driver.script_path, *inputs, out])
        second = driver.run(["exe", driver.script_path, *inputs, out])

        assert first.dependencies == second.dependencies


@pytest.mark.integration
class TestScenarios:
    """Named build scenarios."""

    def test_two_files_into_missing_directory(self, runtime, tmp_path, monkeypatch):
        """Test `build a.src b.src out/` with both inputs compiling."""
        monkeypatch.chdir(tmp_path)
        Path("a.src").write_text("a(1);  \n")
        Path("b.src").write_text("b[2];\r\n")

        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)
        result = driver.run(["exe", driver.script_path, "a.src", "b.src", "out/"])

        assert Path("out/a.src").read_text() == "a(1);\n"
        assert Path("out/b.src").read_text() == "b[2];\n"
        report = format_dependencies(result.dependencies).splitlines()
        assert report == [
            f"dep:{driver.script_path}",
            f"dep:{driver.config_module_path}",
            "dep:a.src",
            "dep:b.src",
        ]

    def test_rejected_file(self, runtime, tmp_path, monkeypatch):
        """Test `build bad.src out/` where the engine rejects the input."""
        monkeypatch.chdir(tmp_path)
        Path("bad.src").write_text("function bad() {\n")

        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)
        with pytest.raises(TransformError) as exc_info:
            driver.run(["exe", driver.script_path, "bad.src", "out/"])

        assert "bad.src" in str(exc_info.value)
        assert Path("out").is_dir()
        assert not Path("out/bad.src").exists()

    def test_debugger_subtree_uses_override(self, runtime, tmp_path, monkeypatch):
        """Test that debugger sources get the debugger plugin list."""
        monkeypatch.chdir(tmp_path)
        src_dir = Path("devtools/client/debugger/src")
        src_dir.mkdir(parents=True)
        (src_dir / "pause.js").write_text("function pause() {\n\tdebugger;\n}")
        other = Path("devtools/client/shared")
        other.mkdir(parents=True)
        (other / "util.js").write_text("function util() {\n\tdebugger;\n}")

        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)
        driver.run(
            [
                "exe",
                driver.script_path,
                str(src_dir / "pause.js"),
                str(other / "util.js"),
                "out",
            ],
        )

        assert Path("out/pause.js").read_text() == "function pause() {\n}\n"
        assert Path("out/util.js").read_text() == "function util() {\n\tdebugger;\n}"

    def test_project_config_changes_defaults(self, runtime, tmp_path, monkeypatch):
        """Test that .srcbuild.yaml replaces the default plugin list."""
        monkeypatch.chdir(tmp_path)
        Path(".srcbuild.yaml").write_text(
            "default_plugins:\n  - expand-tabs\n  - ensure-final-newline\n",
        )
        Path("x.js").write_text("\tx(")

        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)
        driver.run(["exe", driver.script_path, "x.js", "out"])

        assert Path("out/x.js").read_text() == "  x(\n"

    def test_transform_error_lists_engine_stack(self, runtime, tmp_path):
        """Test that the error text carries the engine failure details."""
        bad = tmp_path / "bad.js"
        bad.write_text("}")
        driver = BuildDriver.from_settings(load_settings(tmp_path), runtime)

        with pytest.raises(TransformError, match="Unexpected '}' at line 1"):
            driver.run(["exe", driver.script_path, str(bad), str(tmp_path / "o")])
