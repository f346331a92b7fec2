from __future__ import annotations

from typing import Sequence

from .model import Location, Pickle

__all__ = ["DiscoveryError", "FilterError", "ParseError", "ReadError", "UnknownLanguage"]


class DiscoveryError(Exception):
    """A feature file could not be turned into test cases."""

    def __init__(self, uri: str, message: str):
        self.uri = uri
        self.message = message
        super().__init__(f"{uri}: {message}")


class ReadError(DiscoveryError):
    """The feature file could not be read."""


class ParseError(DiscoveryError):
    """
    The feature file is not valid Gherkin.

    ``location`` points at the first offending token. ``messages`` holds every error the parser
    reported, in source order.
    """

    def __init__(self, uri: str, messages: Sequence[str], location: Location | None = None):
        self.location = location
        self.messages = list(messages)
        super().__init__(uri, "\n".join(self.messages))


class FilterError(DiscoveryError):
    """The scenario filter raised while deciding on a pickle."""

    def __init__(self, uri: str, pickle: Pickle, error: Exception):
        self.pickle = pickle
        self.error = error
        super().__init__(uri, f'filter failed on "{pickle.name}": {error!r}')


class UnknownLanguage(Exception):
    """The default Gherkin dialect does not exist."""

    def __init__(self, language: str):
        self.language = language
        super().__init__(f"Language not supported: {language}")
