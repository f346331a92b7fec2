"""
Events published while discovering test cases.

An :class:`EventBroadcaster` is created by the caller for one discovery run and handed to every
stage of the pipeline. Stages publish flat event records on it; reporters subscribe by event name.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar

from .model import GherkinDocument, Pickle

logger = logging.getLogger(__name__)

__all__ = [
    "EventBroadcaster",
    "GherkinDocumentEvent",
    "Media",
    "PickleAcceptedEvent",
    "PickleEvent",
    "PickleRejectedEvent",
    "SourceEvent",
    "Subscriber",
]

Subscriber = Callable[[Any], Any]


class EventBroadcaster:
    """
    Synchronous publish/subscribe hub.

    Subscribers are called in registration order. A subscriber only sees events emitted after it
    was registered; nothing is buffered or replayed.
    """

    def __init__(self):
        self._subscribers: dict[str, list[Subscriber]] = {}
        self._lock = threading.Lock()

    def on(self, name: str, subscriber: Subscriber) -> Subscriber:
        """Register ``subscriber`` for events called ``name``."""
        with self._lock:
            self._subscribers.setdefault(name, []).append(subscriber)
        return subscriber

    def off(self, name: str, subscriber: Subscriber) -> None:
        """Remove the first registration of ``subscriber`` for ``name``, if any."""
        with self._lock:
            subscribers = self._subscribers.get(name, [])
            if subscriber in subscribers:
                subscribers.remove(subscriber)

    def subscribers(self, name: str) -> list[Subscriber]:
        with self._lock:
            return list(self._subscribers.get(name, []))

    def emit(self, name: str, payload: Any) -> None:
        """Deliver ``payload`` to the subscribers registered for ``name`` right now."""
        subscribers = self.subscribers(name)
        logger.debug("Emitting %s to %d subscriber(s)", name, len(subscribers))
        for subscriber in subscribers:
            subscriber(payload)


@dataclass(frozen=True)
class Media:
    encoding: str = "utf-8"
    type: str = "text/vnd.cucumber.gherkin+plain"


@dataclass(frozen=True)
class SourceEvent:
    type: ClassVar[str] = "source"

    uri: str
    data: str
    media: Media = field(default_factory=Media)


@dataclass(frozen=True)
class GherkinDocumentEvent:
    type: ClassVar[str] = "gherkin-document"

    uri: str
    document: GherkinDocument


@dataclass(frozen=True)
class PickleEvent:
    type: ClassVar[str] = "pickle"

    uri: str
    pickle: Pickle


@dataclass(frozen=True)
class PickleAcceptedEvent(PickleEvent):
    type: ClassVar[str] = "pickle-accepted"


@dataclass(frozen=True)
class PickleRejectedEvent(PickleEvent):
    type: ClassVar[str] = "pickle-rejected"
