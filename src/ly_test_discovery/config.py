from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Mapping, Pattern, Sequence

import toml

__all__ = ["DiscoveryConfiguration", "NoProjectFile"]

DEFAULT_INCLUDE = r"\.feature$"


@dataclass
class DiscoveryConfiguration:
    """Configuration for discovering test cases, read from ``[tool.discovery]``."""

    name: str = ""
    language: str = "en"
    include: Pattern[str] = field(default_factory=lambda: re.compile(DEFAULT_INCLUDE))
    best_effort: bool = False
    _config_file: ClassVar[Path] = Path("pyproject.toml")

    @classmethod
    def get_config(cls) -> DiscoveryConfiguration:
        pyproject = cls.get_configfile()
        config: Mapping[str, Any] = toml.load(pyproject).get("tool", {}).get("discovery", {})
        return DiscoveryConfiguration(
            name=pyproject.parent.name,
            language=config.get("language", "en"),
            include=re.compile(config.get("include", DEFAULT_INCLUDE)),
            best_effort=bool(config.get("best_effort", False)),
        )

    @classmethod
    def get_configfile(cls) -> Path:
        cwd = Path.cwd().absolute()
        paths = [cwd] + list(cwd.parents)
        for path in paths:
            pyproject = path / cls._config_file
            if pyproject.exists() and pyproject.is_file():
                break
        else:
            raise NoProjectFile(cls._config_file, search_paths=paths)
        return pyproject


class NoProjectFile(Exception):
    """No project file could be found."""

    def __init__(self, proj_filename: Path, search_paths: Sequence[Path]):
        self.proj_filename = proj_filename.as_posix()
        self.search_paths = [path.as_posix() for path in search_paths]
