"""Error kinds raised while loading rule and fact files.

Every parsing failure aborts the load and surfaces as a single
:class:`LoadError`. Callers branch on ``error.kind`` rather than on the
message text:

    try:
        kb = load_rules("Prueba-1.reglas")
    except LoadError as e:
        if e.kind is LoadErrorKind.TRUNCATED_INPUT:
            ...
"""

from __future__ import annotations

from enum import Enum

__all__ = ["LoadErrorKind", "LoadError"]


class LoadErrorKind(str, Enum):
    """Why a load failed."""

    IO_UNAVAILABLE = "io_unavailable"
    MALFORMED_COUNT = "malformed_count"
    TRUNCATED_INPUT = "truncated_input"
    MALFORMED_RULE_LINE = "malformed_rule_line"
    MALFORMED_ANTECEDENT = "malformed_antecedent"
    MALFORMED_FACT_LINE = "malformed_fact_line"
    MISSING_KEYWORD = "missing_keyword"
    EMPTY_GOAL = "empty_goal"


class LoadError(ValueError):
    """A rule or fact source could not be loaded.

    Attributes:
        kind: The failure category
        message: Human-readable description of what is wrong
        line_number: 1-based line of the source, if known
        text: The offending raw text, if any
    """

    def __init__(
        self,
        kind: LoadErrorKind,
        message: str,
        *,
        line_number: int | None = None,
        text: str | None = None,
    ) -> None:
        self.kind = kind
        self.message = message
        self.line_number = line_number
        self.text = text
        super().__init__(str(self))

    def __str__(self) -> str:
        where = f" (line {self.line_number})" if self.line_number is not None else ""
        what = f": {self.text!r}" if self.text is not None else ""
        return f"[{self.kind.value}]{where} {self.message}{what}"

    def with_line(self, line_number: int) -> LoadError:
        """Return a copy of this error located at ``line_number``."""
        return LoadError(
            self.kind,
            self.message,
            line_number=line_number,
            text=self.text,
        )
