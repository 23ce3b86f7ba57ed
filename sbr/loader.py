"""Load rule and fact files into a KnowledgeBase and a FactBase.

Rule file:
    4
    R1: Si h2 o h3 Entonces h1, FC = 0.5
    R2: Si h4 Entonces h1, FC = 1
    ...

Fact file:
    2
    h2, FC = 0.3
    h4, FC = 0.6
    Objetivo
    h1

Blank lines are skipped everywhere after the count header and do not
count as records. Any malformed line aborts the load with a LoadError
carrying the 1-based line number; no partial base is returned.

Example usage:
    from sbr.loader import load_rules, load_facts

    kb = load_rules("Prueba-1.reglas")
    fb = load_facts("Prueba-1.hechos")
    print(fb.goal.name, fb.memory)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, TypeVar

from sbr.errors import LoadError, LoadErrorKind
from sbr.parsing import fold_case, parse_count, parse_fact_line, parse_rule_line, trim
from sbr.schema import Fact, FactBase, KnowledgeBase, Rule

__all__ = [
    "GOAL_KEYWORD",
    "load_rules",
    "load_facts",
    "read_rules",
    "read_facts",
]

logger = logging.getLogger(__name__)

GOAL_KEYWORD = "objetivo"

T = TypeVar("T")

Source = str | Iterable[str]


class _LineReader:
    """Walks the lines of a source, tracking the 1-based line number."""

    def __init__(self, source: Source) -> None:
        if isinstance(source, str):
            source = source.splitlines()
        self._lines: Iterator[str] = iter(source)
        self.line_number = 0

    def next_line(self) -> str | None:
        """Return the next raw line, or None at end of input."""
        line = next(self._lines, None)
        if line is not None:
            self.line_number += 1
        return line

    def next_nonblank(self) -> str | None:
        """Return the next non-blank line, trimmed, or None at end of input."""
        while (line := self.next_line()) is not None:
            line = trim(line)
            if line:
                return line
        return None


def _read_count(reader: _LineReader, what: str) -> int:
    header = reader.next_line()
    if header is None:
        raise LoadError(
            LoadErrorKind.MALFORMED_COUNT,
            f"Empty source, expected the number of {what}",
            line_number=1,
        )
    try:
        return parse_count(header)
    except ValueError as e:
        raise LoadError(
            LoadErrorKind.MALFORMED_COUNT,
            f"Invalid number of {what}",
            line_number=reader.line_number,
            text=trim(header),
        ) from e


def _read_records(
    reader: _LineReader,
    expected: int,
    parse: Callable[[str], T],
    what: str,
) -> list[T]:
    records: list[T] = []
    while len(records) < expected:
        line = reader.next_nonblank()
        if line is None:
            raise LoadError(
                LoadErrorKind.TRUNCATED_INPUT,
                f"Unexpected end of input: expected {expected} {what}, read {len(records)}",
                line_number=reader.line_number,
            )
        try:
            records.append(parse(line))
        except LoadError as e:
            raise e.with_line(reader.line_number) from e.__cause__

    if len(records) != expected:
        logger.warning(f"Expected {expected} {what}, but loaded {len(records)}")
    return records


def read_rules(source: Source) -> KnowledgeBase:
    """Parse rule file content.

    Args:
        source: The whole file as a string, or an iterable of lines
            (an open file, ``io.StringIO``, a list)

    Returns:
        KnowledgeBase with the rules in file order

    Raises:
        LoadError: On the first malformed or missing line
    """
    reader = _LineReader(source)
    expected = _read_count(reader, "rules")
    rules: list[Rule] = _read_records(reader, expected, parse_rule_line, "rules")
    logger.debug(f"Loaded {len(rules)} rules")
    return KnowledgeBase(rules=rules)


def read_facts(source: Source) -> FactBase:
    """Parse fact file content, including the trailing goal section.

    Working memory is seeded from the facts in order, so a repeated
    name keeps its last certainty while ``initial_facts`` keeps every
    entry. Content after the goal line is ignored.

    Raises:
        LoadError: On the first malformed or missing line
    """
    reader = _LineReader(source)
    expected = _read_count(reader, "facts")
    facts: list[Fact] = _read_records(reader, expected, parse_fact_line, "facts")

    keyword = reader.next_nonblank()
    if keyword is None:
        raise LoadError(
            LoadErrorKind.MISSING_KEYWORD,
            "Keyword 'Objetivo' not found",
            line_number=reader.line_number,
        )
    if fold_case(keyword) != GOAL_KEYWORD:
        raise LoadError(
            LoadErrorKind.MISSING_KEYWORD,
            "Expected keyword 'Objetivo'",
            line_number=reader.line_number,
            text=keyword,
        )

    goal_name = reader.next_nonblank()
    if goal_name is None:
        raise LoadError(
            LoadErrorKind.EMPTY_GOAL,
            "No goal fact after 'Objetivo'",
            line_number=reader.line_number,
        )

    fact_base = FactBase.from_facts(facts, goal=Fact(name=goal_name))
    logger.debug(f"Loaded {len(facts)} facts, goal '{goal_name}'")
    return fact_base


def _load(path: str | Path, encoding: str, read: Callable[[Source], T]) -> T:
    try:
        with open(Path(path), encoding=encoding) as f:
            return read(f)
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(
            LoadErrorKind.IO_UNAVAILABLE,
            f"Cannot read {path}: {e}",
        ) from e


def load_rules(path: str | Path, encoding: str = "utf-8") -> KnowledgeBase:
    """Load a rule file into a KnowledgeBase.

    Raises:
        LoadError: IO_UNAVAILABLE if the file cannot be read, or the
            parse error of the first malformed line
    """
    return _load(path, encoding, read_rules)


def load_facts(path: str | Path, encoding: str = "utf-8") -> FactBase:
    """Load a fact file into a FactBase.

    Raises:
        LoadError: IO_UNAVAILABLE if the file cannot be read, or the
            parse error of the first malformed line
    """
    return _load(path, encoding, read_facts)
