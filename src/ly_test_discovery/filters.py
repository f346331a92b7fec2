from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol, Union, runtime_checkable

from .errors import FilterError
from .events import EventBroadcaster, PickleAcceptedEvent, PickleRejectedEvent
from .model import Pickle, TestCase

logger = logging.getLogger(__name__)

__all__ = ["AcceptAll", "FilterGate", "Predicate", "ScenarioFilter", "FilterLike", "as_filter"]


@runtime_checkable
class ScenarioFilter(Protocol):
    """Decides whether a pickle should be run. Must not have side effects."""

    def matches(self, pickle: Pickle) -> bool:
        ...


@dataclass(frozen=True)
class AcceptAll:
    """Accept every pickle."""

    def matches(self, pickle: Pickle) -> bool:
        return True


@dataclass(frozen=True)
class Predicate:
    """Accept the pickles for which ``func`` returns a truthy value."""

    func: Callable[[Pickle], bool]

    def matches(self, pickle: Pickle) -> bool:
        return bool(self.func(pickle))


FilterLike = Union[ScenarioFilter, Callable[[Pickle], bool], None]


def as_filter(scenario_filter: FilterLike) -> ScenarioFilter:
    """Normalize what a caller passed as a filter."""
    if scenario_filter is None:
        return AcceptAll()
    if isinstance(scenario_filter, ScenarioFilter):
        return scenario_filter
    return Predicate(scenario_filter)


@dataclass
class FilterGate:
    """
    Decide on pickles one at a time.

    Accepted pickles are collected as test cases in the order they were admitted.
    """

    broadcaster: EventBroadcaster
    scenario_filter: ScenarioFilter = field(default_factory=AcceptAll)
    accepted: list[TestCase] = field(default_factory=list)

    def admit(self, pickle: Pickle) -> bool:
        try:
            matched = self.scenario_filter.matches(pickle)
        except Exception as e:
            raise FilterError(pickle.uri, pickle, e) from e
        event_type = PickleAcceptedEvent if matched else PickleRejectedEvent
        logger.debug("%s: %s", event_type.type, pickle.name)
        self.broadcaster.emit(event_type.type, event_type(uri=pickle.uri, pickle=pickle))
        if matched:
            self.accepted.append(TestCase(pickle=pickle, uri=pickle.uri))
        return bool(matched)
