"""
Data model for parsed feature files and the pickles compiled from them.

Everything here is immutable. Sequences are stored as tuples so that documents and pickles can be
compared, hashed and shared between event subscribers without copying.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = [
    "Background",
    "Comment",
    "DataTable",
    "DocString",
    "Examples",
    "Feature",
    "GherkinDocument",
    "Location",
    "Pickle",
    "PickleArgument",
    "PickleCell",
    "PickleRow",
    "PickleStep",
    "PickleString",
    "PickleTable",
    "Rule",
    "Scenario",
    "Step",
    "TableCell",
    "TableRow",
    "Tag",
    "TestCase",
]


@dataclass(frozen=True)
class Location:
    """A 1-based position in a source file."""

    line: int
    column: int = 1

    def shifted(self, columns: int) -> Location:
        return Location(line=self.line, column=self.column + columns)


@dataclass(frozen=True)
class Comment:
    location: Location
    text: str


@dataclass(frozen=True)
class Tag:
    location: Location
    name: str


@dataclass(frozen=True)
class TableCell:
    location: Location
    value: str


@dataclass(frozen=True)
class TableRow:
    location: Location
    cells: tuple[TableCell, ...] = ()

    @property
    def values(self) -> tuple[str, ...]:
        return tuple(cell.value for cell in self.cells)


@dataclass(frozen=True)
class DataTable:
    location: Location
    rows: tuple[TableRow, ...] = ()


@dataclass(frozen=True)
class DocString:
    location: Location
    content: str
    delimiter: str = '"""'
    media_type: str | None = None


@dataclass(frozen=True)
class Step:
    """
    A single step line.

    The keyword is kept verbatim, including its trailing separator (``"Given "``), so that the
    start of the step text is ``location.column + len(keyword)``.
    """

    location: Location
    keyword: str
    text: str
    keyword_type: str | None = None
    argument: DocString | DataTable | None = None


@dataclass(frozen=True)
class Background:
    location: Location
    keyword: str
    name: str = ""
    description: str | None = None
    steps: tuple[Step, ...] = ()


@dataclass(frozen=True)
class Examples:
    location: Location
    keyword: str
    name: str = ""
    description: str | None = None
    tags: tuple[Tag, ...] = ()
    table_header: TableRow | None = None
    table_body: tuple[TableRow, ...] = ()


@dataclass(frozen=True)
class Scenario:
    """A scenario, or a scenario outline when it carries examples."""

    location: Location
    keyword: str
    name: str = ""
    description: str | None = None
    tags: tuple[Tag, ...] = ()
    steps: tuple[Step, ...] = ()
    examples: tuple[Examples, ...] = ()

    @property
    def is_outline(self) -> bool:
        return bool(self.examples)


@dataclass(frozen=True)
class Rule:
    location: Location
    keyword: str
    name: str = ""
    description: str | None = None
    tags: tuple[Tag, ...] = ()
    children: tuple[Background | Scenario, ...] = ()


@dataclass(frozen=True)
class Feature:
    location: Location
    keyword: str
    name: str = ""
    description: str | None = None
    language: str = "en"
    tags: tuple[Tag, ...] = ()
    children: tuple[Background | Scenario | Rule, ...] = ()


@dataclass(frozen=True)
class GherkinDocument:
    """The parsed tree of one feature file. ``feature`` is None for an empty source."""

    feature: Feature | None = None
    comments: tuple[Comment, ...] = ()


@dataclass(frozen=True)
class PickleString:
    location: Location
    content: str
    content_type: str | None = None


@dataclass(frozen=True)
class PickleCell:
    location: Location
    value: str


@dataclass(frozen=True)
class PickleRow:
    cells: tuple[PickleCell, ...] = ()


@dataclass(frozen=True)
class PickleTable:
    rows: tuple[PickleRow, ...] = ()


PickleArgument = Union[PickleString, PickleTable]


@dataclass(frozen=True)
class PickleStep:
    text: str
    arguments: tuple[PickleArgument, ...] = ()
    locations: tuple[Location, ...] = ()


@dataclass(frozen=True)
class Pickle:
    """A concrete scenario ready to be executed: backgrounds applied, placeholders resolved."""

    uri: str
    language: str
    name: str
    tags: tuple[Tag, ...] = ()
    locations: tuple[Location, ...] = ()
    steps: tuple[PickleStep, ...] = ()

    @property
    def tag_names(self) -> tuple[str, ...]:
        return tuple(tag.name for tag in self.tags)


@dataclass(frozen=True)
class TestCase:
    """An accepted pickle, as returned by the discovery pipeline."""

    __test__ = False  # Not a pytest test class.

    pickle: Pickle
    uri: str
