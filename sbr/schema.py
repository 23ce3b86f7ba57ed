"""Pydantic models for rule-based knowledge with certainty factors.

This module defines the in-memory structures produced by the loaders
and consumed by an inference engine:

- Fact: A named proposition, optionally carrying a certainty factor (FC)
- Antecedent: The "Si" side of a rule, literals joined by one operator
- Rule: Antecedent => consequent, weighted by the rule's own FC
- KnowledgeBase: Ordered rules, in file order
- FactBase: Initial facts, the goal to query and the working memory

Example rule file line and its model:
    R3: Si h5 y h6 Entonces h3, FC = 0.7

    Rule(
        id="R3",
        antecedent=Antecedent(
            conditions=(Fact(name="h5"), Fact(name="h6")),
            operator=LogicalOperator.AND,
        ),
        consequent=Fact(name="h3"),
        rule_certainty=0.7,
    )
"""

from __future__ import annotations

from enum import Enum
from typing import Iterator

from pydantic import BaseModel, Field, field_validator, model_validator

__all__ = [
    "Fact",
    "LogicalOperator",
    "Antecedent",
    "Rule",
    "KnowledgeBase",
    "FactBase",
]

# Whitespace stripped from names and fields by every parser
WHITESPACE = " \t\n\r\f\v"


class LogicalOperator(str, Enum):
    """How the literals of an antecedent are combined."""

    NONE = "none"  # single condition
    AND = "and"
    OR = "or"

    @property
    def keyword(self) -> str | None:
        """Return the file-format keyword for this operator."""
        return {LogicalOperator.AND: "y", LogicalOperator.OR: "o"}.get(self)


class Fact(BaseModel):
    """A proposition and, once known, its certainty factor.

    Facts inside an antecedent or used as a consequent or goal carry
    only a name; the certainty is resolved later against working memory.
    Names are compared exactly: equal names denote the same proposition.
    """

    model_config = {"frozen": True}

    name: str = Field(..., description="Proposition name, original case preserved")
    certainty: float | None = Field(
        default=None,
        description="Certainty factor, None while unset",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure the fact name is not blank."""
        if not v.strip(WHITESPACE):
            raise ValueError("Fact name must not be empty")
        return v

    def has_certainty(self) -> bool:
        """Check if a certainty factor has been assigned."""
        return self.certainty is not None

    def __str__(self) -> str:
        if self.certainty is None:
            return self.name
        return f"{self.name}, FC = {self.certainty!r}"


class Antecedent(BaseModel):
    """Conditions of a rule combined by a single logical operator.

    Mixed AND/OR antecedents are not representable: the operator applies
    to every pair of adjacent conditions.
    """

    model_config = {"frozen": True}

    conditions: tuple[Fact, ...] = Field(..., description="Literal facts, in file order")
    operator: LogicalOperator = Field(
        default=LogicalOperator.NONE,
        description="Operator joining the conditions",
    )

    @model_validator(mode="after")
    def check_arity(self) -> Antecedent:
        """Enforce NONE <=> exactly one condition."""
        if not self.conditions:
            raise ValueError("Antecedent must have at least one condition")
        if self.operator is LogicalOperator.NONE and len(self.conditions) != 1:
            raise ValueError(
                f"Operator NONE requires exactly one condition, got {len(self.conditions)}"
            )
        if self.operator is not LogicalOperator.NONE and len(self.conditions) < 2:
            raise ValueError(f"Operator {self.operator.value} requires two or more conditions")
        return self

    @property
    def names(self) -> list[str]:
        """Names of the conditions, in order."""
        return [c.name for c in self.conditions]

    def __str__(self) -> str:
        keyword = self.operator.keyword
        if keyword is None:
            return self.conditions[0].name
        return f" {keyword} ".join(self.names)


class Rule(BaseModel):
    """An uncertain implication: Si <antecedent> Entonces <consequent>.

    The rule certainty conventionally lies in [-1.0, 1.0]; negative
    values express disconfirming evidence. The range is not enforced.
    """

    model_config = {"frozen": True}

    id: str = Field(..., description="Rule identifier, e.g. 'R1'")
    antecedent: Antecedent
    consequent: Fact = Field(..., description="Derived fact (name only)")
    rule_certainty: float = Field(..., description="Certainty factor of the implication")

    def __str__(self) -> str:
        return (
            f"{self.id}: Si {self.antecedent} Entonces {self.consequent.name}, "
            f"FC = {self.rule_certainty!r}"
        )


class KnowledgeBase(BaseModel):
    """Rules in the order they appear in the rule file."""

    rules: list[Rule] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self) -> Iterator[Rule]:  # type: ignore[override]
        return iter(self.rules)

    def get(self, rule_id: str) -> Rule | None:
        """Return the first rule with the given id, if any."""
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None


class FactBase(BaseModel):
    """Initial facts, the query goal and the working memory.

    ``memory`` is seeded from ``initial_facts``; when a name repeats the
    last certainty wins. The goal's certainty stays unset: it is what an
    inference engine is asked to compute.
    """

    initial_facts: list[Fact] = Field(default_factory=list)
    goal: Fact = Field(..., description="Fact whose certainty is queried")
    memory: dict[str, float] = Field(
        default_factory=dict,
        description="Working memory: fact name -> known certainty",
    )

    @classmethod
    def from_facts(cls, facts: list[Fact], goal: Fact) -> FactBase:
        """Build a fact base, seeding working memory from ``facts``."""
        memory: dict[str, float] = {}
        for fact in facts:
            if fact.certainty is not None:
                memory[fact.name] = fact.certainty
        return cls(initial_facts=list(facts), goal=goal, memory=memory)

    def certainty_of(self, name: str) -> float | None:
        """Return the known certainty for ``name``, or None."""
        return self.memory.get(name)
