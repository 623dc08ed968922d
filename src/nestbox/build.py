"""Build-script helpers: the ``ResourceDir`` builder and package-manager hooks.

Typical build step::

    from nestbox.build import NpmBuild, resource_dir

    npm = NpmBuild("./web").install().run_script("build")
    (
        resource_dir(npm.target_dir)
        .with_hook(npm)
        .with_generated_filename("myapp/assets.py")
        .build()
    )

Hooks run before the directory is walked.  They exist for side effects
such as producing the assets with an external tool; the collector only
sees a directory that is ready to read.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from nestbox.codegen import generate_from_config
from nestbox.config import BuildConfig
from nestbox.errors import ConfigurationError, PackageManagerError
from nestbox.resources import ResourceTable

logger = logging.getLogger("nestbox.build")

BuildHook: TypeAlias = Callable[[], None]


class NpmBuild:
    """Runs ``npm`` (or a compatible tool) in a package directory.

    Commands are queued with ``install()`` and ``run_script()`` and run,
    in order, when the hook is called.
    """

    __slots__ = ("_commands", "executable", "package_dir", "target")

    def __init__(
        self,
        package_dir: str | Path,
        *,
        executable: str = "npm",
        target: str = "dist",
    ) -> None:
        self.package_dir = Path(package_dir)
        self.executable = executable
        self.target = target
        self._commands: tuple[tuple[str, ...], ...] = ()

    def install(self) -> NpmBuild:
        """Queue ``npm install``."""
        self._commands = (*self._commands, ("install",))
        return self

    def run_script(self, name: str) -> NpmBuild:
        """Queue ``npm run <name>``."""
        self._commands = (*self._commands, ("run", name))
        return self

    @property
    def target_dir(self) -> Path:
        """Directory the package build writes its output to."""
        return self.package_dir / self.target

    @property
    def commands(self) -> tuple[tuple[str, ...], ...]:
        """Full command lines, in the order they will run."""
        return tuple((self.executable, *args) for args in self._commands)

    def __call__(self) -> None:
        if not (self.package_dir / "package.json").is_file():
            msg = f"No package.json in {self.package_dir}"
            raise ConfigurationError(msg)
        executable = shutil.which(self.executable) or self.executable
        for command in self.commands:
            logger.info("running %s in %s", " ".join(command), self.package_dir)
            completed = subprocess.run(  # noqa: S603
                (executable, *command[1:]),
                cwd=self.package_dir,
                check=False,
            )
            if completed.returncode != 0:
                raise PackageManagerError(command, completed.returncode)


class ResourceDir:
    """Chainable build configuration for one resource directory."""

    __slots__ = ("_filter", "_generated_filename", "_generated_fn", "_hooks", "_split_by", "resource_dir")

    def __init__(self, resource_dir: str | Path) -> None:
        self.resource_dir = Path(resource_dir)
        self._filter: Callable[[Path], bool] | None = None
        self._generated_filename: Path | None = None
        self._generated_fn = "generate"
        self._split_by: int | None = None
        self._hooks: list[BuildHook] = []

    def with_filter(self, filter: Callable[[Path], bool]) -> ResourceDir:
        """Only collect entries for which *filter* returns True."""
        self._filter = filter
        return self

    def with_generated_filename(self, generated_filename: str | Path) -> ResourceDir:
        """Where to write the generated module."""
        self._generated_filename = Path(generated_filename)
        return self

    def with_generated_fn(self, generated_fn: str) -> ResourceDir:
        """Name of the constructor function in the generated module."""
        self._generated_fn = generated_fn
        return self

    def with_split_by(self, split_by: int) -> ResourceDir:
        """Emit resources in helper functions of at most *split_by* entries."""
        self._split_by = split_by
        return self

    def with_hook(self, hook: BuildHook) -> ResourceDir:
        """Run *hook* before the directory is collected."""
        self._hooks.append(hook)
        return self

    def to_config(self) -> BuildConfig:
        """Freeze the builder into a ``BuildConfig``.

        Raises:
            ConfigurationError: If no generated filename was set or a
                value is invalid.
        """
        if self._generated_filename is None:
            msg = "ResourceDir needs with_generated_filename() before build()"
            raise ConfigurationError(msg)
        return BuildConfig(
            resource_dir=self.resource_dir,
            generated_filename=self._generated_filename,
            generated_fn=self._generated_fn,
            split_by=self._split_by,
            filter=self._filter,
        )

    def build(self) -> ResourceTable:
        """Run the hooks, then collect and write the generated module."""
        config = self.to_config()
        for hook in self._hooks:
            hook()
        return generate_from_config(config)


def resource_dir(path: str | Path) -> ResourceDir:
    """Start a ``ResourceDir`` build for *path*."""
    return ResourceDir(path)
