"""Parse one line of a rule file.

Line format (keywords are case-insensitive):
    <id>: Si <antecedent> Entonces <consequent>, FC=<number>

The certainty factor marker is searched from the end of the line, and
the separating comma is the last one before that marker, so commas or
"fc=" earlier in the text never cut the rule short.
"""

from __future__ import annotations

import logging

from sbr.errors import LoadError, LoadErrorKind
from sbr.schema import Fact, Rule

from .antecedent import parse_antecedent
from .text import FC_MARKER, fold_case, parse_certainty, rfind_marker, trim

__all__ = ["SI_TOKEN", "ENTONCES_TOKEN", "parse_rule_line"]

logger = logging.getLogger(__name__)

SI_TOKEN = "si "
ENTONCES_TOKEN = " entonces "


def _malformed(message: str, text: str) -> LoadError:
    return LoadError(LoadErrorKind.MALFORMED_RULE_LINE, message, text=text)


def parse_rule_line(line: str) -> Rule:
    """Parse a rule definition into a Rule.

    Args:
        line: A single non-blank line of the rule file

    Returns:
        The parsed Rule

    Raises:
        LoadError: MALFORMED_RULE_LINE for structural problems,
            MALFORMED_ANTECEDENT if the condition list is invalid
    """
    line = trim(line)

    colon = line.find(":")
    if colon == -1:
        raise _malformed("Missing ':' after rule id", line)
    rule_id = trim(line[:colon])
    if not rule_id:
        raise _malformed("Empty rule id", line)
    body = trim(line[colon + 1 :])

    fc_span = rfind_marker(fold_case(body), FC_MARKER)
    if fc_span is None:
        raise _malformed("Missing 'FC='", body)
    fc_start, fc_end = fc_span

    comma = body.rfind(",", 0, fc_start)
    if comma == -1:
        raise _malformed("Missing ',' before 'FC='", body)

    fc_text = trim(body[fc_end:])
    try:
        certainty = parse_certainty(fc_text)
    except ValueError as e:
        raise _malformed("Invalid rule certainty factor", fc_text) from e

    clause = trim(body[:comma])
    folded = fold_case(clause)
    if not folded.startswith(SI_TOKEN):
        raise _malformed("Rule must start with 'Si'", clause)

    # Start one char early so an empty antecedent still finds " entonces "
    entonces = folded.find(ENTONCES_TOKEN, len(SI_TOKEN) - 1)
    if entonces == -1:
        raise _malformed("Missing 'Entonces'", clause)

    antecedent_text = trim(clause[len(SI_TOKEN) : entonces])
    consequent_text = trim(clause[entonces + len(ENTONCES_TOKEN) :])
    if not antecedent_text:
        raise _malformed("Empty antecedent", clause)
    if not consequent_text:
        raise _malformed("Empty consequent", clause)

    antecedent = parse_antecedent(antecedent_text)

    rule = Rule(
        id=rule_id,
        antecedent=antecedent,
        consequent=Fact(name=consequent_text),
        rule_certainty=certainty,
    )
    logger.debug(f"Parsed rule {rule}")
    return rule
