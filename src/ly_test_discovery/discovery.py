"""
Turn feature files into test cases.

For every path, in order: load the source, parse it, compile its pickles and pass each pickle
through the filter. All events for one path are published before the next path is touched.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .document import DocumentCompiler
from .errors import DiscoveryError, ParseError, ReadError
from .events import EventBroadcaster
from .filters import FilterGate, FilterLike, as_filter
from .model import TestCase
from .pickles import PickleCompiler
from .source import PathLike, SourceLoader

logger = logging.getLogger(__name__)

__all__ = ["DiscoveryResult", "PathFailure", "discover", "get_test_cases"]


@dataclass(frozen=True)
class PathFailure:
    """A path that was skipped in best-effort mode."""

    uri: str
    error: DiscoveryError


@dataclass
class DiscoveryResult:
    test_cases: list[TestCase] = field(default_factory=list)
    failures: list[PathFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


async def discover(
    paths: Iterable[PathLike],
    broadcaster: EventBroadcaster,
    scenario_filter: FilterLike = None,
    *,
    language: str = "en",
    best_effort: bool = False,
) -> DiscoveryResult:
    """
    Discover the test cases in ``paths``.

    A path that cannot be read or parsed aborts the run, unless ``best_effort`` is set: then the
    failure is recorded and the remaining paths are still processed. A failing filter always aborts
    the run.
    """
    loader = SourceLoader(broadcaster)
    documents = DocumentCompiler(broadcaster, language=language)
    pickles = PickleCompiler(broadcaster)
    gate = FilterGate(broadcaster, as_filter(scenario_filter))
    failures: list[PathFailure] = []

    for path in paths:
        try:
            source = await loader.load(path)
            document = documents.compile(source)
        except (ReadError, ParseError) as e:
            if not best_effort:
                raise
            logger.error(e)
            failures.append(PathFailure(uri=e.uri, error=e))
            continue
        for pickle in pickles.compile(document, source.uri):
            gate.admit(pickle)

    logger.debug("Accepted %d test case(s)", len(gate.accepted))
    return DiscoveryResult(test_cases=gate.accepted, failures=failures)


async def get_test_cases(
    paths: Iterable[PathLike],
    broadcaster: EventBroadcaster,
    scenario_filter: FilterLike = None,
    *,
    language: str = "en",
) -> list[TestCase]:
    """Return the accepted test cases in ``paths``, in path order then declaration order."""
    result = await discover(paths, broadcaster, scenario_filter, language=language)
    return result.test_cases
