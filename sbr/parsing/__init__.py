"""Line-level parsers for the rule and fact file formats.

Each parser takes one line of text and returns a model from
:mod:`sbr.schema`, or raises :class:`sbr.errors.LoadError`. Parsers
hold no state between calls.
"""

from .text import (
    FC_MARKER,
    fold_case,
    trim,
    find_marker,
    rfind_marker,
    parse_certainty,
    parse_count,
)
from .antecedent import (
    AND_TOKEN,
    OR_TOKEN,
    split_literals,
    parse_antecedent,
)
from .rule_line import parse_rule_line
from .fact_line import parse_fact_line

__all__ = [
    # Text utilities
    "FC_MARKER",
    "fold_case",
    "trim",
    "find_marker",
    "rfind_marker",
    "parse_certainty",
    "parse_count",
    # Antecedents
    "AND_TOKEN",
    "OR_TOKEN",
    "split_literals",
    "parse_antecedent",
    # Lines
    "parse_rule_line",
    "parse_fact_line",
]
