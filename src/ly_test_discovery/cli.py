#!/usr/bin/env python
"""
Discover the test cases in Gherkin feature files.

Prints one line per accepted test case: the feature file, the line the test case starts on and its
name. Use ``--json`` for the complete pickles.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Sequence

import click

from . import __version__
from .config import DiscoveryConfiguration, NoProjectFile
from .discovery import DiscoveryResult, discover
from .errors import DiscoveryError, UnknownLanguage
from .events import EventBroadcaster
from .filters import AcceptAll, Predicate, ScenarioFilter
from .model import Pickle

logger = logging.getLogger(__name__)

__all__ = ["main"]


@click.command()
@click.option("--verbose", is_flag=True, default=False)
@click.option("--language", default=None, help="Default Gherkin dialect, e.g. 'fr'.")
@click.option(
    "--best-effort", is_flag=True, default=False, help="Skip files that cannot be read or parsed."
)
@click.option(
    "--name",
    "names",
    multiple=True,
    help="Only keep scenarios whose name matches this regular expression.",
)
@click.option("--tag", "tags", multiple=True, help="Only keep scenarios carrying this tag.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print pickles as JSON.")
@click.argument("files", nargs=-1, type=click.Path(path_type=Path))
@click.version_option(__version__)
def main(
    verbose: bool,
    language: str | None,
    best_effort: bool,
    names: Sequence[str],
    tags: Sequence[str],
    as_json: bool,
    files: Sequence[Path],
):
    if verbose:
        logging.basicConfig()
        logging.getLogger("ly_test_discovery").setLevel(logging.DEBUG)

    try:
        config = DiscoveryConfiguration.get_config()
    except NoProjectFile as e:
        logger.debug(
            '"%s" could not be located in the search paths: %s', e.proj_filename, e.search_paths
        )
        config = DiscoveryConfiguration()

    found_files = _resolve_files(config, files)
    try:
        result = asyncio.run(
            discover(
                found_files,
                EventBroadcaster(),
                _scenario_filter(names, tags),
                language=language or config.language,
                best_effort=best_effort or config.best_effort,
            )
        )
    except (DiscoveryError, UnknownLanguage) as e:
        click.echo(str(e))
        click.echo("Discovery failed.")
        sys.exit(1)

    _report(result, as_json)
    if result.failures:
        click.echo("Discovery finished with errors.")
        sys.exit(1)


def _scenario_filter(names: Sequence[str], tags: Sequence[str]) -> ScenarioFilter:
    if not names and not tags:
        return AcceptAll()
    patterns = [re.compile(name) for name in names]
    wanted_tags = {tag if tag.startswith("@") else f"@{tag}" for tag in tags}

    def _matches(pickle: Pickle) -> bool:
        if patterns and not any(pattern.search(pickle.name) for pattern in patterns):
            return False
        return not wanted_tags or bool(wanted_tags.intersection(pickle.tag_names))

    return Predicate(_matches)


def _resolve_files(config: DiscoveryConfiguration, files: Sequence[Path]) -> Sequence[Path]:
    # Recursively search directories provided on the command line.
    found_files = [
        file_
        for part in files
        for file_ in (sorted(part.rglob("*")) if part.is_dir() else [part])
        if part == file_ or (config.include.search(file_.as_posix()) and file_.is_file())
    ]
    if not found_files:
        click.echo("No feature files found.")
        sys.exit(0)
    return found_files


def _report(result: DiscoveryResult, as_json: bool):
    if as_json:
        click.echo(json.dumps([asdict(test_case) for test_case in result.test_cases], indent=2))
    else:
        for test_case in result.test_cases:
            line = test_case.pickle.locations[0].line
            click.echo(f"{test_case.uri}:{line}: {test_case.pickle.name}")
    for failure in result.failures:
        click.echo(f"Skipped {failure.error}", err=True)
