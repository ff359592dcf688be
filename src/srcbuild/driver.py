"""Build driver: transform every input into the output directory.

Usage: ``srcbuild [SOURCE_FILE...] OUTPUT_DIR``

Each source is compiled with the configured engine and written under
OUTPUT_DIR using its base name. The files the build depended on are reported
as ``dep:`` lines so the calling build system can track them.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from srcbuild.errors import ConfigError, InvocationError
from srcbuild.materializer import DirectoryMaterializer
from srcbuild.pipeline import PluginOverride, TransformPipeline
from srcbuild.runtime import RuntimeProvider
from srcbuild.settings import BuildSettings
from srcbuild_common.constants import DEPENDENCY_MARKER
from srcbuild_logging import get_cli_logger

logger = get_cli_logger(__name__)

SCRIPT_PATH = __file__


@dataclass
class BuildResult:
    """Dependencies reported by a build and the output files it wrote."""

    dependencies: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)


def parse_invocation(argv: Sequence[str]) -> tuple[list[str], str]:
    """Split ``[executable, script, *inputs, output_dir]``.

    Raises
    ------
    InvocationError
        If no output directory follows the script path
    """
    if len(argv) < 3:
        msg = "Usage: srcbuild [SOURCE_FILE...] OUTPUT_DIR"
        raise InvocationError(msg)
    return list(argv[2:-1]), argv[-1]


def format_dependencies(dependencies: Sequence[str]) -> str:
    """Render one ``dep:<path>`` line per dependency, in order."""
    return "\n".join(f"{DEPENDENCY_MARKER}{path}" for path in dependencies)


class BuildDriver:
    """Run a full build on a runtime provider.

    Parameters
    ----------
    runtime : RuntimeProvider
        Capabilities to build with
    pipeline : TransformPipeline
        Per-file transform step
    script_path : str
        Path reported first in the dependency list
    config_module_path : str
        Absolute path of the engine module, reported second
    """

    def __init__(
        self,
        runtime: RuntimeProvider,
        pipeline: TransformPipeline,
        script_path: str,
        config_module_path: str,
    ) -> None:
        self.runtime = runtime
        self.pipeline = pipeline
        self.script_path = script_path
        self.config_module_path = config_module_path
        self.materializer = DirectoryMaterializer(runtime.fs, runtime.paths)

    @classmethod
    def from_settings(
        cls,
        settings: BuildSettings,
        runtime: RuntimeProvider,
    ) -> BuildDriver:
        """Load the engine and plugin providers named by ``settings``.

        Raises
        ------
        ModuleLoadError
            If a configured module fails to load
        ConfigError
            If a loaded module lacks ``transform``/``plugins_for``
        """
        loader = runtime.loader
        engine = loader.load(settings.engine, settings.base_dir)
        if not callable(getattr(engine, "transform", None)):
            msg = f"Engine module '{settings.engine}' does not define transform()"
            raise ConfigError(msg)

        overrides = []
        for spec in settings.overrides:
            provider = loader.load(spec.provider, settings.base_dir)
            if not callable(getattr(provider, "plugins_for", None)):
                msg = f"Plugin provider '{spec.provider}' does not define plugins_for()"
                raise ConfigError(msg)
            overrides.append(PluginOverride(spec.pattern, provider))

        pipeline = TransformPipeline(
            runtime.fs,
            engine,
            settings.default_plugins,
            overrides,
        )
        return cls(
            runtime,
            pipeline,
            script_path=runtime.paths.resolve(SCRIPT_PATH),
            config_module_path=loader.module_path(engine),
        )

    def run(self, argv: Sequence[str]) -> BuildResult:
        """Build every input named in ``argv``.

        The first failure aborts the build; outputs already written stay on
        disk.
        """
        inputs, output_dir = parse_invocation(argv)
        self.materializer.ensure(output_dir)

        result = BuildResult(dependencies=[self.script_path, self.config_module_path])
        for src_path in inputs:
            code = self.pipeline.transform(src_path)
            full_path = self.runtime.paths.join(
                output_dir,
                self.runtime.paths.basename(src_path),
            )
            self.runtime.fs.write_file(full_path, code)
            logger.info("Wrote %s", full_path)
            result.outputs.append(full_path)
            result.dependencies.append(src_path)

        return result
