"""
Compile Gherkin documents into pickles.

A pickle is one concrete scenario: a plain scenario compiles to exactly one pickle, a scenario
outline compiles to one pickle per examples row. Backgrounds are prepended to every scenario in
their scope and tags accumulate from the feature down to the scenario.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Sequence, Tuple

from .events import EventBroadcaster, PickleEvent
from .model import (
    Background,
    DataTable,
    DocString,
    Examples,
    GherkinDocument,
    Location,
    Pickle,
    PickleArgument,
    PickleCell,
    PickleRow,
    PickleStep,
    PickleString,
    PickleTable,
    Rule,
    Scenario,
    Step,
    Tag,
    TableRow,
)

logger = logging.getLogger(__name__)

__all__ = ["PickleCompiler", "compile_pickles", "interpolate"]

# Examples column name and the value it takes in one row, in column order.
Variables = Sequence[Tuple[str, str]]


def interpolate(text: str, variables: Variables) -> str:
    """
    Replace ``<name>`` placeholders with the matching column values.

    Columns are applied in order, so with duplicated column names the leftmost one wins.
    Placeholders without a matching column are left as they are.
    """
    for name, value in variables:
        text = text.replace(f"<{name}>", value)
    return text


@dataclass(frozen=True)
class _Scope:
    """What a scenario inherits from its enclosing feature and rule."""

    uri: str
    language: str
    tags: tuple[Tag, ...] = ()
    background: tuple[Step, ...] = ()

    def enter(self, rule: Rule) -> _Scope:
        return replace(self, tags=self.tags + rule.tags)

    def with_background(self, background: Background) -> _Scope:
        return replace(self, background=self.background + background.steps)


def compile_pickles(document: GherkinDocument, uri: str) -> Iterator[Pickle]:
    """Yield the pickles of ``document`` in declaration order."""
    feature = document.feature
    if feature is None:
        return
    scope = _Scope(uri=uri, language=feature.language, tags=feature.tags)
    yield from _compile_children(feature.children, scope)


def _compile_children(
    children: Iterable[Background | Scenario | Rule], scope: _Scope
) -> Iterator[Pickle]:
    for child in children:
        if isinstance(child, Background):
            scope = scope.with_background(child)
        elif isinstance(child, Rule):
            yield from _compile_children(child.children, scope.enter(child))
        elif child.is_outline:
            yield from _compile_outline(child, scope)
        else:
            yield _compile_scenario(child, scope)


def _compile_scenario(scenario: Scenario, scope: _Scope) -> Pickle:
    return Pickle(
        uri=scope.uri,
        language=scope.language,
        name=scenario.name,
        tags=scope.tags + scenario.tags,
        locations=(scenario.location,),
        steps=tuple(_pickle_step(step) for step in scope.background + scenario.steps),
    )


def _compile_outline(scenario: Scenario, scope: _Scope) -> Iterator[Pickle]:
    background = tuple(_pickle_step(step) for step in scope.background)
    for examples in scenario.examples:
        if examples.table_header is None:
            continue
        for row in examples.table_body:
            yield _compile_row(scenario, examples, row, scope, background)


def _compile_row(
    scenario: Scenario,
    examples: Examples,
    row: TableRow,
    scope: _Scope,
    background: tuple[PickleStep, ...],
) -> Pickle:
    assert examples.table_header is not None
    variables = list(zip(examples.table_header.values, row.values))
    steps = tuple(_pickle_step(step, variables, row.location) for step in scenario.steps)
    return Pickle(
        uri=scope.uri,
        language=scope.language,
        name=interpolate(scenario.name, variables),
        tags=scope.tags + scenario.tags + examples.tags,
        locations=(row.location, scenario.location),
        steps=background + steps,
    )


def _pickle_step(
    step: Step, variables: Variables = (), row_location: Location | None = None
) -> PickleStep:
    # Point at the step text rather than the keyword.
    locations = (step.location.shifted(len(step.keyword)),)
    if row_location is not None:
        locations += (row_location,)
    arguments: tuple[PickleArgument, ...] = ()
    if step.argument is not None:
        arguments = (_pickle_argument(step.argument, variables),)
    return PickleStep(
        text=interpolate(step.text, variables), arguments=arguments, locations=locations
    )


def _pickle_argument(argument: DocString | DataTable, variables: Variables) -> PickleArgument:
    if isinstance(argument, DocString):
        return PickleString(
            location=argument.location,
            content=interpolate(argument.content, variables),
            content_type=interpolate(argument.media_type, variables)
            if argument.media_type
            else None,
        )
    return PickleTable(
        rows=tuple(
            PickleRow(
                cells=tuple(
                    PickleCell(location=cell.location, value=interpolate(cell.value, variables))
                    for cell in row.cells
                )
            )
            for row in argument.rows
        )
    )


@dataclass
class PickleCompiler:
    """Compile documents and publish a ``pickle`` event for each pickle."""

    broadcaster: EventBroadcaster

    def compile(self, document: GherkinDocument, uri: str) -> Iterator[Pickle]:
        """
        Yield the pickles of ``document``.

        Each ``pickle`` event is published just before its pickle is yielded, so a consumer that
        decides on every pickle before asking for the next one keeps the events interleaved.
        """
        count = 0
        for pickle in compile_pickles(document, uri):
            count += 1
            self.broadcaster.emit(PickleEvent.type, PickleEvent(uri=uri, pickle=pickle))
            yield pickle
        logger.debug("Compiled %d pickle(s) from %s", count, uri)
