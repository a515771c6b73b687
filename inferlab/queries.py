"""Queries for the inference engine and JSON-like text forms of facts and rules."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any

from inferlab.knowledge import Condition, Fact, Rule
from inferlab.values import Value, to_value

UINT64_MAX = 2**64 - 1
UINT32_MAX = 2**32 - 1


def _check_range(name: str, number: int, upper: int) -> int:
    number = int(number)
    if not 0 <= number <= upper:
        raise ValueError(f"{name} must be between 0 and {upper}, got {number}")
    return number


def _format_number(number: float) -> str:
    # Default stream formatting of a double: six significant digits.
    return f"{number:g}"


class QueryType(enum.Enum):
    """What a query asks the engine to do."""

    FIND_ALL = "FIND_ALL"
    PROVE = "PROVE"
    FIND_FIRST = "FIND_FIRST"
    EXPLAIN = "EXPLAIN"


@dataclass
class Query:
    """A goal pattern to search for or prove, with result and time limits."""

    id: int
    type: QueryType
    goal: Condition
    max_results: int = 100
    timeout_ms: int = 5000
    metadata: dict[str, Value] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.id = _check_range("id", self.id, UINT64_MAX)
        self.type = QueryType(self.type)
        if not isinstance(self.goal, Condition):
            raise TypeError(f"goal must be Condition, not {type(self.goal).__name__}")
        self.max_results = _check_range("max_results", self.max_results, UINT32_MAX)
        self.timeout_ms = _check_range("timeout_ms", self.timeout_ms, UINT32_MAX)
        self.metadata = {key: to_value(item) for key, item in self.metadata.items()}

    def __str__(self) -> str:
        return f"Query[{self.id}]: {self.type.value} {self.goal}"


def _fact_json(item: Fact) -> str:
    args = ", ".join(str(arg) for arg in item.args)
    return (
        "{\n"
        f"  \"id\": {item.id},\n"
        f"  \"predicate\": \"{item.predicate}\",\n"
        f"  \"args\": [{args}],\n"
        f"  \"confidence\": {_format_number(item.confidence)},\n"
        f"  \"timestamp\": {item.timestamp}\n"
        "}"
    )


def _rule_json(item: Rule) -> str:
    conditions = ", ".join(f"\"{condition}\"" for condition in item.conditions)
    conclusions = ", ".join(f"\"{conclusion}\"" for conclusion in item.conclusions)
    return (
        "{\n"
        f"  \"id\": {item.id},\n"
        f"  \"name\": \"{item.name}\",\n"
        f"  \"conditions\": [{conditions}],\n"
        f"  \"conclusions\": [{conclusions}],\n"
        f"  \"priority\": {item.priority}\n"
        "}"
    )


def to_json(item: Any) -> str:
    """Render a fact or a rule as JSON-like text for debugging."""
    if isinstance(item, Fact):
        return _fact_json(item)
    if isinstance(item, Rule):
        return _rule_json(item)
    raise TypeError(f"cannot render {type(item).__name__} as JSON")