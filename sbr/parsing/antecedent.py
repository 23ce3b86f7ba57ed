"""Antecedent parsing: "h5 y h6" -> [h5, h6] joined by AND.

The operator is chosen by whichever padded keyword (" y " or " o ")
appears first in the text; the string is then split on that keyword
only. A mixed antecedent such as "a y b o c" therefore becomes the two
AND literals "a" and "b o c". Keyword search runs on the case-folded
text, literals are sliced from the original so names keep their case.
"""

from __future__ import annotations

import logging

from sbr.errors import LoadError, LoadErrorKind
from sbr.schema import Antecedent, Fact, LogicalOperator

from .text import fold_case, trim

__all__ = [
    "AND_TOKEN",
    "OR_TOKEN",
    "split_literals",
    "parse_antecedent",
]

logger = logging.getLogger(__name__)

AND_TOKEN = " y "
OR_TOKEN = " o "


def split_literals(text: str, folded: str, token: str) -> list[str]:
    """Split ``text`` on every occurrence of ``token`` found in ``folded``.

    ``folded`` must be ``fold_case(text)``. Returns the trimmed segments
    in order, including empty ones.
    """
    literals = []
    cursor = 0
    pos = folded.find(token, cursor)
    while pos != -1:
        literals.append(trim(text[cursor:pos]))
        cursor = pos + len(token)
        pos = folded.find(token, cursor)
    literals.append(trim(text[cursor:]))
    return literals


def parse_antecedent(text: str) -> Antecedent:
    """Parse the condition part of a rule.

    Args:
        text: Condition text between "Si" and "Entonces"

    Returns:
        Antecedent with one Fact (name only) per literal

    Raises:
        LoadError: MALFORMED_ANTECEDENT if any literal is empty
    """
    text = trim(text)
    folded = fold_case(text)
    pos_and = folded.find(AND_TOKEN)
    pos_or = folded.find(OR_TOKEN)

    if pos_and != -1 and (pos_or == -1 or pos_and < pos_or):
        operator = LogicalOperator.AND
        literals = split_literals(text, folded, AND_TOKEN)
    elif pos_or != -1:
        operator = LogicalOperator.OR
        literals = split_literals(text, folded, OR_TOKEN)
    else:
        operator = LogicalOperator.NONE
        literals = [text]

    if any(not literal for literal in literals):
        raise LoadError(
            LoadErrorKind.MALFORMED_ANTECEDENT,
            "Empty literal in antecedent",
            text=text,
        )

    if pos_and != -1 and pos_or != -1:
        logger.warning(
            f"Antecedent mixes 'y' and 'o'; split on '{operator.keyword}' only: {literals}"
        )

    conditions = tuple(Fact(name=literal) for literal in literals)
    return Antecedent(conditions=conditions, operator=operator)
