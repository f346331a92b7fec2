"""Runner for the discover command."""
from __future__ import annotations

import os
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from behave.runner import Context
from click.testing import CliRunner, Result

from ly_test_discovery.cli import main


@contextmanager
def set_directory(path: Path):
    """Sets the cwd within the context."""
    origin = Path().absolute()
    try:
        os.chdir(path)
        yield
    finally:
        os.chdir(origin)


@dataclass
class DiscoverEnvironment:
    _path: Path
    verbose: bool = False
    project_files: dict[str, str] = field(default_factory=dict)
    _runner: CliRunner = field(init=False)

    @property
    def _project_dir(self) -> Path:
        return self._path / "project"

    def __post_init__(self):
        self._runner = CliRunner()

    def _setup_environment(self):
        self._project_dir.mkdir(parents=True)
        for rel_path, contents in self.project_files.items():
            (self._project_dir / rel_path).parent.mkdir(parents=True, exist_ok=True)
            (self._project_dir / rel_path).write_text(contents, encoding="utf-8")

    def run(self, *args: str) -> Result:
        if not self._project_dir.exists():
            self._setup_environment()
        invoke_args = list(args)
        if self.verbose:
            invoke_args.append("--verbose")
        with set_directory(self._project_dir):
            return self._runner.invoke(main, invoke_args)  # type: ignore


class DiscoverContext(Context):
    discover: DiscoverEnvironment
    result: Result | None
