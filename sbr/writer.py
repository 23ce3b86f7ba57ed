"""Serialize knowledge and fact bases back to the text file formats.

The output is the canonical form accepted by :mod:`sbr.loader`, so
``read_rules(dumps_rules(kb)) == kb`` for any loaded knowledge base.
Certainty factors are written with ``repr`` to survive the round trip.
"""

from __future__ import annotations

import math
from pathlib import Path

from sbr.schema import Fact, FactBase, KnowledgeBase, Rule

__all__ = [
    "format_rule",
    "format_fact",
    "dumps_rules",
    "dumps_facts",
    "dump_rules",
    "dump_facts",
]


def _check_certainty(value: float | None, owner: str) -> float:
    if value is None:
        raise ValueError(f"{owner} has no certainty factor")
    if not math.isfinite(value):
        raise ValueError(f"{owner} has a non-finite certainty factor: {value}")
    return value


def format_rule(rule: Rule) -> str:
    """Render a rule as ``<id>: Si a y b Entonces c, FC = <n>``."""
    _check_certainty(rule.rule_certainty, f"Rule {rule.id}")
    return str(rule)


def format_fact(fact: Fact) -> str:
    """Render a fact as ``<name>, FC = <n>``.

    Raises:
        ValueError: If the fact has no finite certainty factor
    """
    _check_certainty(fact.certainty, f"Fact '{fact.name}'")
    return str(fact)


def dumps_rules(kb: KnowledgeBase) -> str:
    """Return the rule file text for ``kb``."""
    lines = [str(len(kb.rules))]
    lines.extend(format_rule(rule) for rule in kb.rules)
    return "\n".join(lines) + "\n"


def dumps_facts(fb: FactBase) -> str:
    """Return the fact file text for ``fb``, goal section included."""
    lines = [str(len(fb.initial_facts))]
    lines.extend(format_fact(fact) for fact in fb.initial_facts)
    lines.append("Objetivo")
    lines.append(fb.goal.name)
    return "\n".join(lines) + "\n"


def dump_rules(kb: KnowledgeBase, path: str | Path, encoding: str = "utf-8") -> None:
    """Write ``kb`` to a rule file."""
    Path(path).write_text(dumps_rules(kb), encoding=encoding)


def dump_facts(fb: FactBase, path: str | Path, encoding: str = "utf-8") -> None:
    """Write ``fb`` to a fact file."""
    Path(path).write_text(dumps_facts(fb), encoding=encoding)
