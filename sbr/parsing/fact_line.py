"""Parse one line of a fact file: ``<name>, FC=<number>``."""

from __future__ import annotations

from sbr.errors import LoadError, LoadErrorKind
from sbr.schema import Fact

from .text import FC_MARKER, find_marker, fold_case, parse_certainty, trim

__all__ = ["parse_fact_line"]


def parse_fact_line(line: str) -> Fact:
    """Parse a fact with its certainty factor.

    The name ends at the last comma of the line; the remainder must
    start with the "FC=" marker.

    Raises:
        LoadError: MALFORMED_FACT_LINE if the line does not match
    """
    line = trim(line)

    comma = line.rfind(",")
    if comma == -1:
        raise LoadError(LoadErrorKind.MALFORMED_FACT_LINE, "Missing ','", text=line)

    name = trim(line[:comma])
    if not name:
        raise LoadError(LoadErrorKind.MALFORMED_FACT_LINE, "Empty fact name", text=line)

    remainder = trim(line[comma + 1 :])
    marker = find_marker(fold_case(remainder), FC_MARKER)
    if marker is None or marker[0] != 0:
        raise LoadError(
            LoadErrorKind.MALFORMED_FACT_LINE,
            "Expected 'FC=' after ','",
            text=line,
        )

    fc_text = trim(remainder[marker[1] :])
    try:
        certainty = parse_certainty(fc_text)
    except ValueError as e:
        raise LoadError(
            LoadErrorKind.MALFORMED_FACT_LINE,
            "Invalid fact certainty factor",
            text=fc_text,
        ) from e

    return Fact(name=name, certainty=certainty)
