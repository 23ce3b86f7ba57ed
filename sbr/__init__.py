"""sbr: loader for rule-based knowledge with certainty factors.

Reads an expert-system rule file and a fact file (initial facts plus a
query goal) into in-memory structures ready for an inference engine.

Key features:
- Keyword-delimited rule lines: "R1: Si h2 o h3 Entonces h1, FC = 0.5"
- Single-operator antecedents (AND via "y", OR via "o")
- Certainty factors on rules and facts, negative values allowed
- Typed, line-numbered errors; a failed load never returns a partial base

Example usage:
    from sbr import load_rules, load_facts

    kb = load_rules("Prueba-1.reglas")
    fb = load_facts("Prueba-1.hechos")

    for rule in kb.rules:
        print(rule)
    print(f"Goal: {fb.goal.name}")
"""

from .errors import (
    LoadErrorKind,
    LoadError,
)
from .schema import (
    Fact,
    LogicalOperator,
    Antecedent,
    Rule,
    KnowledgeBase,
    FactBase,
)
from .parsing import (
    parse_antecedent,
    parse_rule_line,
    parse_fact_line,
)
from .loader import (
    load_rules,
    load_facts,
    read_rules,
    read_facts,
)
from .writer import (
    format_rule,
    format_fact,
    dumps_rules,
    dumps_facts,
    dump_rules,
    dump_facts,
)

__all__ = [
    # Errors
    "LoadErrorKind",
    "LoadError",
    # Schema
    "Fact",
    "LogicalOperator",
    "Antecedent",
    "Rule",
    "KnowledgeBase",
    "FactBase",
    # Line parsers
    "parse_antecedent",
    "parse_rule_line",
    "parse_fact_line",
    # Loaders
    "load_rules",
    "load_facts",
    "read_rules",
    "read_facts",
    # Writer
    "format_rule",
    "format_fact",
    "dumps_rules",
    "dumps_facts",
    "dump_rules",
    "dump_facts",
]
