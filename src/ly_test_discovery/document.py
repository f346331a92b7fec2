"""
Parse feature files into :class:`~ly_test_discovery.model.GherkinDocument` trees.

The grammar and the dialect keyword tables come from the ``gherkin-official`` parser, which
returns JSON-like dictionaries. This module is the only place that inspects that untyped structure;
everything downstream works with the frozen model classes.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from gherkin.dialect import Dialect
from gherkin.errors import ParserError
from gherkin.parser import Parser
from gherkin.token_matcher import TokenMatcher
from gherkin.token_scanner import TokenScanner

from .errors import ParseError, UnknownLanguage
from .events import EventBroadcaster, GherkinDocumentEvent, SourceEvent
from .model import (
    Background,
    Comment,
    DataTable,
    DocString,
    Examples,
    Feature,
    GherkinDocument,
    Location,
    Rule,
    Scenario,
    Step,
    TableCell,
    TableRow,
    Tag,
)

logger = logging.getLogger(__name__)

__all__ = ["DocumentCompiler", "parse_document"]

Raw = Mapping[str, Any]


def parse_document(data: str, uri: str, language: str = "en") -> GherkinDocument:
    """
    Parse Gherkin source text.

    ``language`` is the dialect used unless the source starts with a ``# language:`` header.
    Raises :class:`ParseError` if the text is not valid Gherkin.
    """
    if Dialect.for_name(language) is None:
        raise UnknownLanguage(language)
    try:
        raw = Parser().parse(TokenScanner(data), TokenMatcher(language))
    except ParserError as e:
        raise _parse_error(uri, e) from e
    return _document(raw)


@dataclass
class DocumentCompiler:
    """Parse ``source`` events and publish the resulting ``gherkin-document`` events."""

    broadcaster: EventBroadcaster
    language: str = "en"

    def __post_init__(self):
        if Dialect.for_name(self.language) is None:
            raise UnknownLanguage(self.language)

    def compile(self, source: SourceEvent) -> GherkinDocument:
        document = parse_document(source.data, source.uri, self.language)
        logger.debug(
            "Parsed %s: %s", source.uri, "empty document" if document.feature is None else "feature"
        )
        self.broadcaster.emit(
            GherkinDocumentEvent.type, GherkinDocumentEvent(uri=source.uri, document=document)
        )
        return document


def _parse_error(uri: str, error: ParserError) -> ParseError:
    # The parser collects errors and raises them together unless it stops at the first one.
    errors = getattr(error, "errors", None) or [error]
    raw_location = getattr(errors[0], "location", None)
    location = _location(raw_location) if raw_location else None
    return ParseError(uri, [str(e) for e in errors], location=location)


def _document(raw: Raw) -> GherkinDocument:
    feature = raw.get("feature")
    return GherkinDocument(
        feature=_feature(feature) if feature else None,
        comments=tuple(
            Comment(location=_location(comment["location"]), text=comment["text"])
            for comment in raw.get("comments", [])
        ),
    )


def _feature(raw: Raw) -> Feature:
    children: list[Background | Scenario | Rule] = []
    for child in raw.get("children", []):
        if "rule" in child:
            children.append(_rule(child["rule"]))
        else:
            children.append(_scenario_child(child))
    return Feature(
        location=_location(raw["location"]),
        keyword=raw["keyword"],
        name=raw.get("name", ""),
        description=raw.get("description") or None,
        language=raw.get("language") or "en",
        tags=_tags(raw.get("tags", [])),
        children=tuple(children),
    )


def _rule(raw: Raw) -> Rule:
    return Rule(
        location=_location(raw["location"]),
        keyword=raw["keyword"],
        name=raw.get("name", ""),
        description=raw.get("description") or None,
        tags=_tags(raw.get("tags", [])),
        children=tuple(_scenario_child(child) for child in raw.get("children", [])),
    )


def _scenario_child(child: Raw) -> Background | Scenario:
    if "background" in child:
        return _background(child["background"])
    return _scenario(child["scenario"])


def _background(raw: Raw) -> Background:
    return Background(
        location=_location(raw["location"]),
        keyword=raw["keyword"],
        name=raw.get("name", ""),
        description=raw.get("description") or None,
        steps=tuple(_step(step) for step in raw.get("steps", [])),
    )


def _scenario(raw: Raw) -> Scenario:
    return Scenario(
        location=_location(raw["location"]),
        keyword=raw["keyword"],
        name=raw.get("name", ""),
        description=raw.get("description") or None,
        tags=_tags(raw.get("tags", [])),
        steps=tuple(_step(step) for step in raw.get("steps", [])),
        examples=tuple(_examples(examples) for examples in raw.get("examples", [])),
    )


def _examples(raw: Raw) -> Examples:
    header = raw.get("tableHeader")
    return Examples(
        location=_location(raw["location"]),
        keyword=raw["keyword"],
        name=raw.get("name", ""),
        description=raw.get("description") or None,
        tags=_tags(raw.get("tags", [])),
        table_header=_row(header) if header else None,
        table_body=tuple(_row(row) for row in raw.get("tableBody") or []),
    )


def _step(raw: Raw) -> Step:
    argument: DocString | DataTable | None = None
    if raw.get("docString"):
        doc_string = raw["docString"]
        argument = DocString(
            location=_location(doc_string["location"]),
            content=doc_string.get("content", ""),
            delimiter=doc_string.get("delimiter", '"""'),
            media_type=doc_string.get("mediaType") or None,
        )
    elif raw.get("dataTable"):
        data_table = raw["dataTable"]
        argument = DataTable(
            location=_location(data_table["location"]),
            rows=tuple(_row(row) for row in data_table.get("rows", [])),
        )
    return Step(
        location=_location(raw["location"]),
        keyword=raw["keyword"],
        text=raw.get("text", ""),
        keyword_type=raw.get("keywordType"),
        argument=argument,
    )


def _row(raw: Raw) -> TableRow:
    return TableRow(
        location=_location(raw["location"]),
        cells=tuple(
            TableCell(location=_location(cell["location"]), value=cell.get("value", ""))
            for cell in raw.get("cells", [])
        ),
    )


def _tags(raw: Iterable[Raw]) -> tuple[Tag, ...]:
    return tuple(Tag(location=_location(tag["location"]), name=tag["name"]) for tag in raw)


def _location(raw: Raw) -> Location:
    return Location(line=raw["line"], column=raw.get("column") or 1)
