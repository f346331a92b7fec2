from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from ly_test_discovery.events import EventBroadcaster

EVENT_NAMES = ["source", "gherkin-document", "pickle", "pickle-accepted", "pickle-rejected"]


@pytest.fixture
def broadcaster() -> EventBroadcaster:
    return EventBroadcaster()


@pytest.fixture
def events(broadcaster: EventBroadcaster) -> list[tuple[str, Any]]:
    """Every event published on ``broadcaster``, in order."""
    recorded: list[tuple[str, Any]] = []

    def _recorder(name: str) -> Callable[[Any], None]:
        def _record(payload: Any):
            recorded.append((name, payload))

        return _record

    for name in EVENT_NAMES:
        broadcaster.on(name, _recorder(name))
    return recorded


@pytest.fixture
def feature_file(tmp_path: Path) -> Callable[..., str]:
    """Write a feature file and return its path."""

    def _write(contents: str, name: str = "test.feature") -> str:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(contents.encode("utf-8"))
        return path.as_posix()

    return _write
