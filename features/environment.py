"""Fixtures for the discover command."""
from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
from typing import Iterable

from behave import fixture, use_fixture
from behave.model import Scenario

from features.steps.discover_env import DiscoverContext, DiscoverEnvironment


@fixture
def discover_environment(context: DiscoverContext) -> Iterable[DiscoverEnvironment]:
    with TemporaryDirectory() as tmp_dir:
        discover = DiscoverEnvironment(_path=Path(tmp_dir), verbose=False, project_files={})
        context.discover = discover
        yield discover


def before_scenario(context: DiscoverContext, _scenario: Scenario):
    use_fixture(discover_environment, context)
