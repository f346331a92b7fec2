import asyncio

import pytest

from ly_test_discovery.errors import ReadError
from ly_test_discovery.events import EventBroadcaster, SourceEvent
from ly_test_discovery.source import SourceLoader


def _load(path):
    broadcaster = EventBroadcaster()
    published = []
    broadcaster.on("source", published.append)
    event = asyncio.run(SourceLoader(broadcaster).load(path))
    return event, published


def test_load_publishes_source(tmp_path):
    path = tmp_path / "a.feature"
    path.write_bytes("Feature: é\r\nScenario: b\r\n".encode("utf-8"))

    event, published = _load(path)

    assert event == SourceEvent(uri=path.as_posix(), data="Feature: é\r\nScenario: b\r\n")
    assert published == [event]


def test_uri_keeps_the_given_path(tmp_path):
    path = tmp_path / "a.feature"
    path.write_text("")
    event, _ = _load(path.as_posix())
    assert event.uri == path.as_posix()


@pytest.mark.parametrize("name", ["missing.feature", "directory"])
def test_unreadable_paths(tmp_path, name):
    (tmp_path / "directory").mkdir()
    path = tmp_path / name

    with pytest.raises(ReadError) as exc_info:
        _load(path)

    assert exc_info.value.uri == path.as_posix()
    assert isinstance(exc_info.value.__cause__, OSError)


def test_invalid_utf8(tmp_path):
    path = tmp_path / "latin1.feature"
    path.write_bytes("Feature: é".encode("latin-1"))

    broadcaster = EventBroadcaster()
    published = []
    broadcaster.on("source", published.append)
    with pytest.raises(ReadError):
        asyncio.run(SourceLoader(broadcaster).load(path))
    assert published == []
