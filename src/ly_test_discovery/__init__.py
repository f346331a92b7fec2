"""Discover test cases (pickles) from Gherkin feature files."""

from .discovery import DiscoveryResult, PathFailure, discover, get_test_cases
from .document import DocumentCompiler, parse_document
from .errors import DiscoveryError, FilterError, ParseError, ReadError, UnknownLanguage
from .events import (
    EventBroadcaster,
    GherkinDocumentEvent,
    Media,
    PickleAcceptedEvent,
    PickleEvent,
    PickleRejectedEvent,
    SourceEvent,
)
from .filters import AcceptAll, FilterGate, Predicate, ScenarioFilter
from .model import GherkinDocument, Location, Pickle, PickleStep, TestCase
from .pickles import PickleCompiler, compile_pickles
from .source import SourceLoader

__version__ = "0.1.0"

__all__ = [
    "AcceptAll",
    "DiscoveryError",
    "DiscoveryResult",
    "DocumentCompiler",
    "EventBroadcaster",
    "FilterError",
    "FilterGate",
    "GherkinDocument",
    "GherkinDocumentEvent",
    "Location",
    "Media",
    "ParseError",
    "PathFailure",
    "Pickle",
    "PickleAcceptedEvent",
    "PickleCompiler",
    "PickleEvent",
    "PickleRejectedEvent",
    "PickleStep",
    "Predicate",
    "ReadError",
    "ScenarioFilter",
    "SourceEvent",
    "SourceLoader",
    "TestCase",
    "UnknownLanguage",
    "compile_pickles",
    "discover",
    "get_test_cases",
    "parse_document",
]
